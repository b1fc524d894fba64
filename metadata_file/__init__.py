"Parser for Vorbis-comment style TAG=VALUE metadata files."

from importlib import metadata

from .errors import (
    EmbeddedNullByteError,
    EmptyTagError,
    IllegalTagCharacterError,
    InvalidUTF8Error,
    MetadataFileError,
    MetadataIOError,
    MetadataOutOfMemory,
)
from .models import SENTINEL, MetadataElement, MetadataList
from .parser import MetadataParser, parse_metadata_bytes, parse_metadata_file
from .utf8 import Utf8Defect, Utf8Result, is_valid_utf8, validate_utf8

__all__ = [
    "__version__",
    "EmbeddedNullByteError",
    "EmptyTagError",
    "IllegalTagCharacterError",
    "InvalidUTF8Error",
    "MetadataElement",
    "MetadataFileError",
    "MetadataIOError",
    "MetadataList",
    "MetadataOutOfMemory",
    "MetadataParser",
    "SENTINEL",
    "Utf8Defect",
    "Utf8Result",
    "is_valid_utf8",
    "parse_metadata_bytes",
    "parse_metadata_file",
    "validate_utf8",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("metadata-file")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
