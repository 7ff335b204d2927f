"""User list, get, create, delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from api.deps import UserStore, require_user
from api.helpers import http_error
from repositories import StoreError
from schemas.requests import UserCreate
from schemas.users import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


# Sync handlers: FastAPI runs them in its threadpool, so blocking file I/O
# never stalls the event loop.

@router.get("")
def list_users(store: UserStore):
    try:
        users = store.list()
    except StoreError as e:
        raise http_error(e) from e
    return JSONResponse({"users": [u.model_dump() for u in users]})


@router.get("/{user_id}")
def get_user(user: Annotated[User, Depends(require_user)]):
    return JSONResponse(user.model_dump())


@router.post("", status_code=201)
def create_user(data: UserCreate, store: UserStore):
    try:
        user = store.create(data.model_dump())
    except StoreError as e:
        raise http_error(e) from e
    logger.info("Created user %s", user.id)
    return JSONResponse(user.model_dump(), status_code=201)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: str, store: UserStore):
    try:
        store.delete(user_id)
    except StoreError as e:
        raise http_error(e) from e
    logger.info("Deleted user %s", user_id)
    return Response(status_code=204)
