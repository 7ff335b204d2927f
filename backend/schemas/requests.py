"""Request body models for the Userbase API."""

from typing import Optional

from pydantic import BaseModel


class UserCreate(BaseModel):
    id: Optional[str] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
