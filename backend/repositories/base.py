"""Interface every record store implements."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, Union

from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)


class StoreProtocol(Protocol[RecordT]):
    """List, create and delete records of one entity type.

    Implementations raise the errors in repositories.errors and never hand
    out references to their internal state.
    """

    def list(self) -> list[RecordT]:
        ...

    def get(self, identifier: str) -> RecordT:
        ...

    def create(self, record: Union[RecordT, Mapping[str, Any]]) -> RecordT:
        ...

    def delete(self, identifier: str) -> None:
        ...
