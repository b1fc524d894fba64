from __future__ import annotations

from typing import Optional

from .utf8 import Utf8Result


class MetadataFileError(Exception):
    """Raised when a metadata file cannot be loaded or parsed."""

    kind = "MetadataFileError"

    def __init__(self, message: str, *, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset


class MetadataIOError(MetadataFileError):
    kind = "IOFailure"


class MetadataOutOfMemory(MetadataFileError):
    kind = "OutOfMemory"

    def __init__(self, message: str = "insufficient memory") -> None:
        super().__init__(message)


class InvalidUTF8Error(MetadataFileError):
    kind = "InvalidUTF8"

    def __init__(self, result: Utf8Result) -> None:
        super().__init__(f"invalid utf-8: {result.message}", offset=result.offset)
        self.result = result


class EmbeddedNullByteError(MetadataFileError):
    kind = "EmbeddedNullByte"

    def __init__(self, offset: int) -> None:
        super().__init__("metadata file mustn't contain null bytes", offset=offset)


class IllegalTagCharacterError(MetadataFileError):
    kind = "IllegalTagCharacter"

    def __init__(self, offset: int, byte: int) -> None:
        super().__init__("illegal character used in tag", offset=offset)
        self.byte = byte


class EmptyTagError(MetadataFileError):
    kind = "EmptyTag"

    def __init__(self, offset: int) -> None:
        super().__init__("empty tags are not permitted", offset=offset)
