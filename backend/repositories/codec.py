"""
Serialization of a record snapshot.
A codec turns an ordered sequence of flat mappings into bytes and back,
so the store never touches the file format directly.
"""

import json
from typing import Any, Mapping, Protocol, Sequence


class CodecError(ValueError):
    """Raised when bytes do not decode to a sequence of flat mappings."""


class RecordCodec(Protocol):
    def serialize(self, records: Sequence[Mapping[str, Any]]) -> bytes:
        ...

    def deserialize(self, data: bytes) -> list[dict[str, Any]]:
        ...


class JSONCodec:
    """JSON array of objects, UTF-8, pretty-printed."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def serialize(self, records: Sequence[Mapping[str, Any]]) -> bytes:
        text = json.dumps([dict(r) for r in records], ensure_ascii=False, indent=self.indent)
        return (text + "\n").encode("utf-8")

    def deserialize(self, data: bytes) -> list[dict[str, Any]]:
        try:
            parsed = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CodecError(f"Invalid JSON: {e}") from e
        if not isinstance(parsed, list):
            raise CodecError(f"Expected a JSON array, got {type(parsed).__name__}")
        for i, item in enumerate(parsed):
            if not isinstance(item, dict):
                raise CodecError(f"Item {i} is {type(item).__name__}, expected an object")
        return parsed
