"""
Parser for ``TAG=VALUE`` metadata files.

Format summary::

    TITLE=Hello
    LYRICS=
    	first line
    	second line

A line holding ``TAG=`` with an empty value opens a multi-line value whose
lines each start with a single tab; the block ends at the first line that
does not. Tag names use the Vorbis comment character set (0x20-0x7D
without ``=``). Blank lines between entries are ignored. The whole file,
after an optional UTF-8 byte-order mark, must be valid UTF-8 and must not
contain NUL bytes.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from .buffers import GrowableBuffer, GrowableList
from .config import ParserSettings
from .errors import (
    EmbeddedNullByteError,
    EmptyTagError,
    IllegalTagCharacterError,
    InvalidUTF8Error,
    MetadataOutOfMemory,
)
from .loader import load_metadata_bytes
from .models import SENTINEL, MetadataElement, MetadataList
from .utf8 import validate_utf8

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"

NUL = 0x00
TAB = 0x09
NEWLINE = 0x0A
EQUALS = 0x3D


class ParserState(Enum):
    TAG = "tag"
    VALUE = "value"
    MULTILINE_VALUE = "multiline_value"
    MULTILINE_INDENT = "multiline_indent"


def is_tag_character(byte: int) -> bool:
    return 0x20 <= byte <= 0x7D and byte != EQUALS


class _ParseRun:
    """State of one parse call; discarded as a whole when parsing fails."""

    def __init__(self, data: bytes, start: int) -> None:
        self.data = data
        self.end = len(data)
        self.pos = start
        self.mark = start
        self.state = ParserState.TAG
        self.tag: Optional[str] = None
        self.value = GrowableBuffer()
        self.output: GrowableList[MetadataElement] = GrowableList()
        self._handlers: Dict[ParserState, Callable[[int], bool]] = {
            ParserState.TAG: self._on_tag,
            ParserState.VALUE: self._on_value,
            ParserState.MULTILINE_VALUE: self._on_multiline_value,
            ParserState.MULTILINE_INDENT: self._on_multiline_indent,
        }

    def run(self) -> MetadataList:
        # Past the end of the buffer a newline is fed in, which flushes a
        # final unterminated line or an open multi-line block.
        while self.pos < self.end or self.state is not ParserState.TAG:
            byte = self.data[self.pos] if self.pos < self.end else NEWLINE
            if byte == NUL:
                raise EmbeddedNullByteError(self.pos)
            consumed = self._handlers[self.state](byte)
            if consumed:
                self.pos += 1
        return MetadataList(self.output.finish(SENTINEL))

    def _text(self) -> str:
        return self.data[self.mark:self.pos].decode("utf-8")

    def _emit(self, value: str) -> None:
        self.output.push(MetadataElement(self.tag, value))
        self.tag = None
        self.value = GrowableBuffer()
        self.state = ParserState.TAG

    def _on_tag(self, byte: int) -> bool:
        if self.pos == self.mark and byte == NEWLINE:
            self.mark = self.pos + 1
            return True
        if byte != EQUALS:
            if not is_tag_character(byte):
                raise IllegalTagCharacterError(self.pos, byte)
            return True
        if self.pos == self.mark:
            raise EmptyTagError(self.pos)
        self.tag = self._text()
        self.state = ParserState.VALUE
        self.mark = self.pos + 1
        return True

    def _on_value(self, byte: int) -> bool:
        if byte != NEWLINE:
            return True
        if self.pos == self.mark:
            self.state = ParserState.MULTILINE_INDENT
            return True
        self._emit(self._text())
        self.mark = self.pos + 1
        return True

    def _on_multiline_value(self, byte: int) -> bool:
        if byte != NEWLINE:
            return True
        self.value.append(self.data[self.mark:self.pos])
        self.state = ParserState.MULTILINE_INDENT
        return True

    def _on_multiline_indent(self, byte: int) -> bool:
        if byte == TAB:
            if self.value:
                self.value.append(b"\n")
            self.state = ParserState.MULTILINE_VALUE
            self.mark = self.pos + 1
            return True
        # The block ended; this byte starts the next line and is read again
        # in the TAG state.
        self._emit(self.value.decode())
        self.mark = self.pos
        return False


class MetadataParser:
    def __init__(self, settings: Optional[ParserSettings] = None) -> None:
        self.settings = settings or ParserSettings()

    def parse(self, data: bytes) -> MetadataList:
        data = bytes(data)
        start = 0
        if self.settings.strip_bom and data.startswith(UTF8_BOM):
            start = len(UTF8_BOM)
            logger.debug("Skipping UTF-8 byte-order mark")
        result = validate_utf8(data, start)
        if not result.valid:
            raise InvalidUTF8Error(result)
        try:
            parsed = _ParseRun(data, start).run()
        except MemoryError as exc:
            raise MetadataOutOfMemory() from exc
        logger.debug("Parsed %d metadata elements", len(parsed.elements))
        return parsed


def parse_metadata_bytes(data: bytes, settings: Optional[ParserSettings] = None) -> MetadataList:
    return MetadataParser(settings).parse(data)


def parse_metadata_file(path: Path | str, settings: Optional[ParserSettings] = None) -> MetadataList:
    data = load_metadata_bytes(path, settings)
    return MetadataParser(settings).parse(data)
