"""
File-based implementation of StoreProtocol.
Keeps every record of one entity type in a single file, rewritten in full
on each change through a temp file and an atomic rename.
"""

from __future__ import annotations

import contextlib
import os
import threading
import uuid
from pathlib import Path
from typing import Any, Generic, Mapping, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from .base import RecordT
from .codec import CodecError, JSONCodec, RecordCodec
from .errors import (
    CorruptState,
    DuplicateIdentifier,
    NotFound,
    StorageUnavailable,
    ValidationFailed,
)

ID_FIELD = "id"


def new_identifier() -> str:
    return uuid.uuid4().hex


class EntityStore(Generic[RecordT]):
    """Thread-safe store for one entity type backed by one file.

    The snapshot is loaded lazily on first use and cached; the store assumes
    it is the only writer of its file while it is alive. Every operation
    holds the instance lock for its whole read-modify-write cycle.
    """

    def __init__(
        self,
        path: Path,
        model: Type[RecordT],
        codec: Optional[RecordCodec] = None,
    ):
        if ID_FIELD not in model.model_fields:
            raise TypeError(f"{model.__name__} has no '{ID_FIELD}' field")
        self.path = Path(path)
        self.model = model
        self.codec = codec or JSONCodec()
        self._lock = threading.Lock()
        self._records: Optional[list[RecordT]] = None

    @property
    def tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    # Disk I/O (callers hold self._lock)

    def _read(self) -> list[RecordT]:
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            self._write([])
            return []
        except OSError as e:
            raise StorageUnavailable(f"Cannot read {self.path}: {e}") from e

        try:
            rows = self.codec.deserialize(data)
        except CodecError as e:
            raise CorruptState(f"{self.path}: {e}") from e

        records: list[RecordT] = []
        seen: set[str] = set()
        for i, row in enumerate(rows):
            try:
                record = self.model.model_validate(row)
            except ValidationError as e:
                raise CorruptState(f"{self.path}: record {i} is invalid: {e}") from e
            ident = getattr(record, ID_FIELD)
            if not ident:
                raise CorruptState(f"{self.path}: record {i} has no identifier")
            if ident in seen:
                raise CorruptState(f"{self.path}: identifier '{ident}' appears twice")
            seen.add(ident)
            records.append(record)
        return records

    def _write(self, records: list[RecordT]) -> None:
        payload = self.codec.serialize([r.model_dump(mode="json") for r in records])
        tmp = self.tmp_path
        try:
            with open(tmp, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageUnavailable(f"Cannot write {self.path}: {e}") from e
        self._fsync_dir()

    def _fsync_dir(self) -> None:
        # Makes the rename itself durable. Directories cannot be opened on Windows.
        if os.name != "posix":
            return
        try:
            fd = os.open(self.path.parent, os.O_RDONLY)
            try:
                os.fsync(fd)
            finally:
                os.close(fd)
        except OSError as e:
            raise StorageUnavailable(f"Cannot sync {self.path.parent}: {e}") from e

    def _commit(self, records: list[RecordT]) -> None:
        """Persist records and adopt them as the snapshot.

        A failed write drops the cached snapshot, so the next operation
        re-reads whichever version the rename left on disk.
        """
        try:
            self._write(records)
        except StorageUnavailable:
            self._records = None
            raise
        self._records = records

    def _snapshot(self) -> list[RecordT]:
        if self._records is None:
            self._records = self._read()
        return self._records

    def _coerce(self, record: Union[RecordT, Mapping[str, Any]]) -> RecordT:
        if isinstance(record, BaseModel):
            data = record.model_dump()
        elif isinstance(record, Mapping):
            data = dict(record)
        else:
            raise ValidationFailed(
                f"Expected a mapping or {self.model.__name__}, got {type(record).__name__}"
            )
        if not data.get(ID_FIELD):
            data[ID_FIELD] = ""
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise ValidationFailed(
                f"Invalid {self.model.__name__}: {e.error_count()} error(s)",
                errors=e.errors(include_url=False, include_context=False),
            ) from e

    # Operations

    def list(self) -> list[RecordT]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._snapshot()]

    def get(self, identifier: str) -> RecordT:
        with self._lock:
            for r in self._snapshot():
                if getattr(r, ID_FIELD) == identifier:
                    return r.model_copy(deep=True)
        raise NotFound(identifier)

    def create(self, record: Union[RecordT, Mapping[str, Any]]) -> RecordT:
        """Validate, assign an identifier if empty, append and persist.

        Raises ValidationFailed, DuplicateIdentifier, StorageUnavailable or
        CorruptState. A write that fails before the rename leaves the file as
        it was.
        """
        candidate = self._coerce(record)
        with self._lock:
            records = self._snapshot()
            taken = {getattr(r, ID_FIELD) for r in records}
            ident = getattr(candidate, ID_FIELD)
            if not ident:
                ident = new_identifier()
                while ident in taken:
                    ident = new_identifier()
                candidate = candidate.model_copy(update={ID_FIELD: ident})
            elif ident in taken:
                raise DuplicateIdentifier(ident)
            self._commit(records + [candidate])
            return candidate.model_copy(deep=True)

    def delete(self, identifier: str) -> None:
        with self._lock:
            records = self._snapshot()
            remaining = [r for r in records if getattr(r, ID_FIELD) != identifier]
            if len(remaining) == len(records):
                raise NotFound(identifier)
            self._commit(remaining)

    def reload(self) -> None:
        """Discard the cached snapshot so external edits to the file are picked up.

        Not needed after a CorruptState: nothing is cached until a load succeeds,
        so every operation re-reads the file until it parses.
        """
        with self._lock:
            self._records = None
