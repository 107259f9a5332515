"""Operator base class, the trivial operators and helpers shared by operators."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Optional, Protocol

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


class Transaction(Protocol):
    """What operators need from a transaction: macro expansion and captures."""

    def macro_expansion(self, data: str) -> str: ...

    def capture_field(self, index: int, value: str) -> None: ...


def expand_macros(tx: Optional[Transaction], data: str) -> str:
    """Expand macros in *data* through *tx*; without a transaction, return it as is."""
    if tx is None:
        return data
    return tx.macro_expansion(data)


def capture_field(tx: Optional[Transaction], index: int, value: str) -> None:
    """Store *value* as capture number *index* when there is a transaction."""
    if tx is not None:
        tx.capture_field(index, value)


def parse_int(text: str) -> int:
    """Parse a signed decimal integer; anything invalid or outside 64 bits gives 0."""
    if not _DECIMAL.fullmatch(text):
        return 0
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return 0
    return value


class Operator(ABC):
    """A rule operator, configured once with its argument and run on values."""

    def __init__(self, data: str = "") -> None:
        self.data = data

    @abstractmethod
    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        """Tell whether *value* matches, using *tx* for macros and captures."""


class NoMatch(Operator):
    """Never matches."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return False


class UnconditionalMatch(Operator):
    """Always matches."""

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return True