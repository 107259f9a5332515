"""Operators that flag values with bytes or encodings outside what is allowed."""

from __future__ import annotations

import enum
import re
from typing import Optional

from ..transformations.encoding import Text, _to_bytes
from .base import Operator, Transaction, parse_int

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


def _range_class(first: int, last: int) -> str:
    return f"[\\x{first & 0xFF:02x}-\\x{last & 0xFF:02x}]"


class ValidateByteRange(Operator):
    """Matches when the value holds a character outside the allowed ranges.

    The argument is a comma-separated list such as ``32-36,38-126``. A lone
    number ``n`` allows every character from 0 up to ``n``.
    """

    def __init__(self, data: str = "") -> None:
        super().__init__(data)
        classes = []
        for item in data.split(","):
            item = item.strip(" ")
            if "-" in item:
                low, high = item.split("-", 1)
                classes.append(_range_class(parse_int(low), parse_int(high)))
            else:
                classes.append(_range_class(0, parse_int(item)))
        try:
            self._allowed = re.compile("|".join(classes))
        except re.error as exc:
            raise ValueError(f"invalid byte range {data!r}: {exc}") from None

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return bool(self._allowed.sub("", value))


class UrlEncodingStatus(enum.Enum):
    """Outcome of checking a value's percent-encoding."""

    VALID = "valid"
    EMPTY = "empty"
    NON_HEXADECIMAL = "non-hexadecimal"
    TRUNCATED = "truncated"


def validate_url_encoding(value: Text) -> UrlEncodingStatus:
    """Check that every ``%`` in *value* starts a ``%xx`` hexadecimal escape."""
    raw = _to_bytes(value)
    if not raw:
        return UrlEncodingStatus.EMPTY
    size = len(raw)
    i = 0
    while i < size:
        if raw[i] != ord("%"):
            i += 1
            continue
        if i + 2 >= size:
            return UrlEncodingStatus.TRUNCATED
        if raw[i + 1] in _HEX_DIGITS and raw[i + 2] in _HEX_DIGITS:
            i += 3
        else:
            return UrlEncodingStatus.NON_HEXADECIMAL
    return UrlEncodingStatus.VALID


class ValidateUrlEncoding(Operator):
    """Matches when a non-empty value has malformed percent-encoding."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        if not value:
            return False
        return validate_url_encoding(value) is not UrlEncodingStatus.VALID