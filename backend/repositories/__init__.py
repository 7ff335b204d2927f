"""Persistence layer: abstract interface, codecs, errors and implementations."""

from .base import StoreProtocol
from .codec import CodecError, JSONCodec, RecordCodec
from .errors import (
    CorruptState,
    DuplicateIdentifier,
    NotFound,
    StorageUnavailable,
    StoreError,
    ValidationFailed,
)
from .file_store import EntityStore

__all__ = [
    "StoreProtocol",
    "EntityStore",
    "RecordCodec",
    "JSONCodec",
    "CodecError",
    "StoreError",
    "ValidationFailed",
    "DuplicateIdentifier",
    "NotFound",
    "StorageUnavailable",
    "CorruptState",
]
