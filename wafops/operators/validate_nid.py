"""Operator that finds national id numbers in a value and validates them."""

from __future__ import annotations

import re
from typing import Optional

from .base import Operator, Transaction, capture_field
from .nids import nid_map

_MAX_MATCHES = 10


def _capturing(tx: Optional[Transaction]) -> bool:
    return tx is not None and bool(getattr(tx, "capture", False))


class ValidateNid(Operator):
    """Matches when a candidate found by the regex is a valid id number.

    The argument is ``<country> <regex>``, for example ``cl \\d+-[\\dk]``.
    Only the first ten candidates are checked; valid ones are captured when
    the transaction has capturing switched on.
    """

    def __init__(self, data: str = "") -> None:
        super().__init__(data)
        parts = data.split(" ", 1)
        if len(parts) != 2:
            raise ValueError(f"invalid @validateNid argument {data!r}")
        country, pattern = parts
        try:
            self._validator = nid_map()[country]
        except KeyError:
            raise ValueError(f"unknown id number kind {country!r}") from None
        try:
            self._pattern = re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"invalid @validateNid regex {pattern!r}: {exc}") from None

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        capturing = _capturing(tx)
        if capturing:
            tx.reset_capture()  # type: ignore[union-attr]
        found = False
        for index, match in enumerate(self._pattern.finditer(value)):
            if index >= _MAX_MATCHES:
                break
            candidate = match.group(0)
            if self._validator.evaluate(candidate):
                found = True
                if capturing:
                    capture_field(tx, index, candidate)
        return found