"""
UTF-8 validation for raw metadata buffers.

The checks follow the canonical encoding table: overlong forms, surrogates
and code points above U+10FFFF are rejected, as are the legacy 5- and 6-byte
sequences. Each call returns its own ``Utf8Result`` so validation carries no
shared state between callers.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

HEX_DIGITS = "0123456789ABCDEF"


class Utf8Defect(str, Enum):
    LENGTH_MARKER = "length marker wrong"
    TOO_FEW_BYTES = "too few bytes"
    INVALID_SEQUENCE = "invalid sequence"


@dataclass(frozen=True, slots=True)
class Utf8Result:
    """Outcome of a single validation call."""
    valid: bool
    defect: Optional[Utf8Defect] = None
    offset: Optional[int] = None
    sequence: bytes = b""

    @property
    def printable(self) -> str:
        return "".join(chr(b) if 0x20 <= b <= 0x7D else "?" for b in self.sequence)

    @property
    def hex_dump(self) -> str:
        return "".join(f"{HEX_DIGITS[b >> 4]}{HEX_DIGITS[b & 0xF]} " for b in self.sequence)

    @property
    def message(self) -> str:
        if self.valid or self.defect is None:
            return ""
        return f'{self.defect.value} "{self.printable}": {self.hex_dump}'

    def __bool__(self) -> bool:
        return self.valid


VALID = Utf8Result(valid=True)


def _is_cont(byte: int) -> bool:
    return (byte & 0xC0) == 0x80


def _sequence_length(lead: int) -> Optional[int]:
    if (lead & 0x80) == 0:
        return 1
    if (lead & 0x40) == 0:
        # Continuation byte where a lead byte was expected.
        return None
    if (lead & 0x20) == 0:
        return 2
    if (lead & 0x10) == 0:
        return 3
    if (lead & 0x08) == 0:
        return 4
    if (lead & 0x04) == 0:
        return 5
    if (lead & 0x02) == 0:
        return 6
    return None


def _is_canonical(seq: bytes) -> bool:
    lead = seq[0]
    size = len(seq)
    if size == 2:
        return _is_cont(seq[1]) and (lead & 0xFE) != 0xC0
    if size == 3:
        second = seq[1]
        if not _is_cont(seq[2]):
            return False
        if lead == 0xE0:
            return 0xA0 <= second <= 0xBF
        if 0xE1 <= lead <= 0xEC or 0xEE <= lead <= 0xEF:
            return _is_cont(second)
        if lead == 0xED:
            return 0x80 <= second <= 0x9F
        return False
    if size == 4:
        second = seq[1]
        if not (_is_cont(seq[2]) and _is_cont(seq[3])):
            return False
        if lead == 0xF0:
            return 0x90 <= second <= 0xBF
        if 0xF1 <= lead <= 0xF3:
            return _is_cont(second)
        if lead == 0xF4:
            return 0x80 <= second <= 0x8F
        return False
    # 5- and 6-byte forms are not valid UTF-8.
    return False


def validate_utf8(data: bytes, start: int = 0, end: Optional[int] = None) -> Utf8Result:
    """
    Validate ``data[start:end]`` as UTF-8.

    Stops at the first defect. The reported ``offset`` is an index into
    ``data`` itself, not into the slice.
    """
    view = memoryview(data)
    if end is None:
        end = len(view)
    pos = start
    while pos < end:
        lead = view[pos]
        size = _sequence_length(lead)
        if size is None:
            return Utf8Result(False, Utf8Defect.LENGTH_MARKER, pos, bytes(view[pos:pos + 1]))
        if size > end - pos:
            return Utf8Result(False, Utf8Defect.TOO_FEW_BYTES, pos, bytes(view[pos:end]))
        if size > 1:
            seq = bytes(view[pos:pos + size])
            if not _is_canonical(seq):
                return Utf8Result(False, Utf8Defect.INVALID_SEQUENCE, pos, seq)
        pos += size
    return VALID


def is_valid_utf8(data: bytes, start: int = 0, end: Optional[int] = None) -> bool:
    return validate_utf8(data, start, end).valid
