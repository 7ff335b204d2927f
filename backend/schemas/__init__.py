"""Pydantic schemas for stored records and API request bodies."""

from .requests import UserCreate
from .users import User

__all__ = [
    "User",
    "UserCreate",
]
