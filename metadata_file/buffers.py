"""Accumulators used while a metadata buffer is being parsed."""
from __future__ import annotations

from typing import Generic, List, Tuple, TypeVar

from .errors import MetadataOutOfMemory

T = TypeVar("T")


class GrowableBuffer:
    """Byte accumulator for tag names and multi-line values."""

    __slots__ = ("_data",)

    def __init__(self, initial: bytes = b"") -> None:
        self._data = bytearray(initial)

    def append(self, data: bytes) -> None:
        if not data:
            return
        try:
            self._data += data
        except MemoryError as exc:
            raise MetadataOutOfMemory() from exc

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def decode(self) -> str:
        # Content is validated up front, so strict decoding cannot fail here.
        try:
            return self._data.decode("utf-8")
        except MemoryError as exc:
            raise MetadataOutOfMemory() from exc


class GrowableList(Generic[T]):
    """Ordered element accumulator handing off an immutable tuple."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[T] = []

    def push(self, item: T) -> None:
        try:
            self._items.append(item)
        except MemoryError as exc:
            raise MetadataOutOfMemory() from exc

    def __len__(self) -> int:
        return len(self._items)

    def finish(self, sentinel: T) -> Tuple[T, ...]:
        self.push(sentinel)
        try:
            return tuple(self._items)
        except MemoryError as exc:
            raise MetadataOutOfMemory() from exc
