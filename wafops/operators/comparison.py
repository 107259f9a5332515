"""String and numeric comparison operators.

Every operator expands macros in its argument through the transaction
before comparing. Numeric operators read both sides as decimal integers,
and a side that is not a valid integer counts as zero.
"""

from __future__ import annotations

import re
from typing import Optional

from .base import Operator, Transaction, expand_macros, parse_int

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def _parse_int_saturating(text: str) -> int:
    """Parse a signed decimal integer; bad syntax gives 0, overflow clamps to 64 bits."""
    if not _DECIMAL.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(int(text), _INT64_MAX))


class BeginsWith(Operator):
    """Matches when the value starts with the argument."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return value.startswith(expand_macros(tx, self.data))


class Contains(Operator):
    """Matches when the argument occurs anywhere in the value."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return expand_macros(tx, self.data) in value


class EndsWith(Operator):
    """Matches when the value ends with the argument."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return value.endswith(expand_macros(tx, self.data))


class Eq(Operator):
    """Matches when the value equals the argument as an integer."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return parse_int(expand_macros(tx, self.data)) == parse_int(value)


class Ge(Operator):
    """Matches when the value is greater than or equal to the argument."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return parse_int(value) >= parse_int(expand_macros(tx, self.data))


class Gt(Operator):
    """Matches when the value is greater than the argument."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return parse_int(expand_macros(tx, self.data)) < parse_int(value)


class Le(Operator):
    """Matches when the value is less than or equal to the argument.

    An argument too large for 64 bits is clamped rather than read as zero.
    """

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        limit = _parse_int_saturating(expand_macros(tx, self.data))
        return parse_int(value) <= limit


class Lt(Operator):
    """Matches when the value is less than the argument."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return parse_int(value) < parse_int(expand_macros(tx, self.data))


class Streq(Operator):
    """Matches when the value equals the argument exactly."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return expand_macros(tx, self.data) == value


class Within(Operator):
    """Matches when the value occurs anywhere in the argument."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return value in expand_macros(tx, self.data)