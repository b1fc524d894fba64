from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from mutagen._vorbis import VCommentDict


@dataclass(frozen=True, slots=True)
class MetadataElement:
    tag: Optional[str]
    value: Optional[str]

    @property
    def is_sentinel(self) -> bool:
        return self.tag is None


SENTINEL = MetadataElement(None, None)


class MetadataList(Sequence[MetadataElement]):
    """
    Parsed entries in source order, always terminated by ``SENTINEL``.

    Indexing and iteration include the sentinel; ``elements`` and ``pairs()``
    give only the real entries.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[MetadataElement] = ()) -> None:
        collected = tuple(items)
        if not collected or not collected[-1].is_sentinel:
            collected = collected + (SENTINEL,)
        if any(item.is_sentinel for item in collected[:-1]):
            raise ValueError("sentinel may only terminate the list")
        self._items: Tuple[MetadataElement, ...] = collected

    def __getitem__(self, index):  # type: ignore[override]
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[MetadataElement]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MetadataList):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"MetadataList({list(self.pairs())!r})"

    @property
    def elements(self) -> Tuple[MetadataElement, ...]:
        return self._items[:-1]

    def pairs(self) -> Iterator[Tuple[str, str]]:
        for element in self.elements:
            yield element.tag, element.value  # type: ignore[misc]

    def get(self, tag: str) -> List[str]:
        """Return every value recorded for ``tag``; tag names compare case-insensitively."""
        wanted = tag.lower()
        return [value for key, value in self.pairs() if key.lower() == wanted]

    def to_dict(self) -> Dict[str, List[str]]:
        result: Dict[str, List[str]] = {}
        for key, value in self.pairs():
            result.setdefault(key, []).append(value)
        return result

    def to_vcomment(self, vendor: Optional[str] = None) -> VCommentDict:
        comment = VCommentDict()
        if vendor is not None:
            comment.vendor = vendor
        comment.extend(self.pairs())
        comment.validate()
        return comment
