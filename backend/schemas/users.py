"""Persisted user record."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class User(BaseModel):
    """One user as stored in users.json. id is assigned by the store when empty."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = ""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v
