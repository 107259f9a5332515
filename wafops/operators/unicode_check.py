"""Operator that flags values that are not well-formed UTF-8."""

from __future__ import annotations

import enum
from typing import Optional

from ..transformations.encoding import Text, _to_bytes
from .base import Operator, Transaction

_RESTRICTED_LEAD = 0xF5

# (mask, marker, sequence width, payload bits of the lead byte)
_LEAD_FORMS = (
    (0xE0, 0xC0, 2, 0x1F),
    (0xF0, 0xE0, 3, 0x0F),
    (0xF8, 0xF0, 4, 0x07),
)
_MIN_CODE = {2: 0x80, 3: 0x800, 4: 0x10000}


class Utf8Fault(enum.Enum):
    """Why a byte sequence is not acceptable UTF-8."""

    CHARACTERS_MISSING = -1
    INVALID_ENCODING = -2
    OVERLONG_CHARACTER = -3
    RESTRICTED_CHARACTER = -4
    DECODING_ERROR = -5


class Utf8Error(ValueError):
    """Raised when the bytes at the start of a value are not acceptable UTF-8."""

    def __init__(self, fault: Utf8Fault) -> None:
        super().__init__(f"invalid UTF-8: {fault.name.lower().replace('_', ' ')}")
        self.fault = fault


def detect_utf8_character(data: Text) -> int:
    """Return the byte length of the UTF-8 character at the start of *data*.

    The range checks look only at the low byte of the code point, so two-byte
    sequences pass when that byte is at least 0x80 and every three- or
    four-byte sequence counts as overlong. Raises :class:`Utf8Error`.
    """
    raw = _to_bytes(data)
    if not raw:
        raise Utf8Error(Utf8Fault.DECODING_ERROR)
    lead = raw[0]
    if lead & 0x80 == 0:
        return 1

    for mask, marker, width, bits in _LEAD_FORMS:
        if lead & mask == marker:
            break
    else:
        raise Utf8Error(Utf8Fault.INVALID_ENCODING)

    if width == 4 and lead >= _RESTRICTED_LEAD:
        raise Utf8Error(Utf8Fault.RESTRICTED_CHARACTER)
    if len(raw) < width:
        raise Utf8Error(Utf8Fault.CHARACTERS_MISSING)
    tail = raw[1:width]
    if any(byte & 0xC0 != 0x80 for byte in tail):
        raise Utf8Error(Utf8Fault.INVALID_ENCODING)

    code = lead & bits
    for byte in tail:
        code = (code << 6) | (byte & 0x3F)
    code &= 0xFF

    if 0xD800 <= code <= 0xDFFF:
        raise Utf8Error(Utf8Fault.RESTRICTED_CHARACTER)
    if code < _MIN_CODE[width]:
        raise Utf8Error(Utf8Fault.OVERLONG_CHARACTER)
    return width


class ValidateUtf8Encoding(Operator):
    """Matches when the value holds a sequence that fails the UTF-8 check."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        raw = _to_bytes(value)
        position = 0
        while position < len(raw):
            try:
                position += detect_utf8_character(raw[position:])
            except Utf8Error:
                return True
        return False