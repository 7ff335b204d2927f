"""Shared helpers for API routes (store error mapping)."""

import logging

from fastapi import HTTPException

from repositories import (
    CorruptState,
    DuplicateIdentifier,
    NotFound,
    StorageUnavailable,
    StoreError,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ValidationFailed: 422,
    DuplicateIdentifier: 409,
    NotFound: 404,
    StorageUnavailable: 503,
    CorruptState: 500,
}


def http_error(exc: StoreError) -> HTTPException:
    """Translate a store error into the HTTPException a route should raise."""
    status = next(
        (code for kind, code in STATUS_BY_ERROR.items() if isinstance(exc, kind)),
        500,
    )
    if status >= 500:
        logger.error("Store failure: %s", exc, exc_info=exc)
    if isinstance(exc, ValidationFailed) and exc.errors:
        return HTTPException(status, exc.errors)
    return HTTPException(status, str(exc))
