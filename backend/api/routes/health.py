"""Liveness plus a check that the user store can load its file."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.deps import UserStore
from config import get_settings
from repositories import CorruptState, StorageUnavailable

router = APIRouter(tags=["health"])


@router.get("/health")
def health(store: UserStore):
    settings = get_settings()
    try:
        user_count = len(store.list())
        storage = "ok"
    except StorageUnavailable:
        user_count, storage = None, "unavailable"
    except CorruptState:
        user_count, storage = None, "corrupt"
    return JSONResponse(
        {
            "status": "ok" if storage == "ok" else "degraded",
            "storage": storage,
            "users": user_count,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.APP_VERSION,
        },
        status_code=200 if storage == "ok" else 503,
    )
