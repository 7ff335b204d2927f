"""
Userbase backend configuration.
Single source of truth for environment and app settings.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_settings():
    """Return app settings (use as FastAPI Depends or call directly)."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    APP_TITLE: str = "Userbase API"
    APP_VERSION: str = "1.0.0"
    ALLOWED_ORIGINS: list[str]
    LOG_LEVEL: str = "INFO"

    # Storage: one JSON file per entity type under the data directory
    USERBASE_DATA_DIR: Path
    USERBASE_USERS_FILE: str = "users.json"

    def __init__(self):
        origins = os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000")
        self.ALLOWED_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]
        level = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
        self.LOG_LEVEL = level if level in LOG_LEVELS else "INFO"
        self.USERBASE_DATA_DIR = Path(os.environ.get("USERBASE_DATA_DIR", "data"))
        self.USERBASE_USERS_FILE = (
            os.environ.get("USERBASE_USERS_FILE") or "users.json"
        ).strip()

    @property
    def users_path(self) -> Path:
        """Backing file of the user store."""
        return self.USERBASE_DATA_DIR / self.USERBASE_USERS_FILE
