"""Error taxonomy for the persistence layer."""

from typing import Any, Optional


class StoreError(Exception):
    """Base class for every error raised by a store."""


class ValidationFailed(StoreError):
    """A record is missing a required attribute or has a malformed one."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicateIdentifier(StoreError):
    def __init__(self, identifier: str):
        super().__init__(f"Record '{identifier}' already exists")
        self.identifier = identifier


class NotFound(StoreError):
    def __init__(self, identifier: str):
        super().__init__(f"Record '{identifier}' not found")
        self.identifier = identifier


class StorageUnavailable(StoreError):
    """The backing file could not be read or written."""


class CorruptState(StoreError):
    """The backing file exists but its content cannot be trusted."""
