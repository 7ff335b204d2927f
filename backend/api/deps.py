"""FastAPI dependencies and require-helpers for routes."""

from typing import Annotated

from fastapi import Depends, Request

from api.helpers import http_error
from repositories import StoreError, StoreProtocol
from schemas.users import User


def get_store(request: Request) -> StoreProtocol[User]:
    """Return the user store owned by the running app. Use in Depends()."""
    return request.app.state.store


UserStore = Annotated[StoreProtocol[User], Depends(get_store)]


def require_user(user_id: str, store: UserStore) -> User:
    """Load user by id or raise 404. Use as Depends(require_user) with user_id in path."""
    try:
        return store.get(user_id)
    except StoreError as e:
        raise http_error(e) from e
