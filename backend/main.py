"""
Userbase Backend API
Endpoints for listing, creating and deleting users backed by a JSON file.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health_router, users_router
from config import Settings, get_settings
from repositories import EntityStore, StoreProtocol
from schemas.users import User

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[StoreProtocol[User]] = None,
) -> FastAPI:
    """Build the app. The store is created from settings unless one is passed in."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    if store is None:
        settings.USERBASE_DATA_DIR.mkdir(parents=True, exist_ok=True)
        store = EntityStore(settings.users_path, User)
        logger.info("User store at %s", settings.users_path)

    app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(users_router)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
