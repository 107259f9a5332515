"""National identification number validators."""

from __future__ import annotations

from typing import Dict, Protocol

_INT64_MAX = 2**63 - 1
_DIGITS = "0123456789"


class Nid(Protocol):
    """Something that tells whether a national id number is valid."""

    def evaluate(self, nid: str) -> bool: ...


def _atoi(text: str) -> int:
    """Parse decimal digits; bad syntax gives 0, overflow clamps."""
    if not text or not (text.isascii() and text.isdigit()):
        return 0
    return min(int(text), _INT64_MAX)


class NidCl:
    """Chilean RUT validator (modulo 11 check digit, ``k`` for ten)."""

    def evaluate(self, nid: str) -> bool:
        if len(nid.encode("utf-8", "surrogateescape")) < 8:
            return False
        cleaned = "".join(c for c in nid.lower() if c in _DIGITS or c == "k")
        if not cleaned:
            return False
        rut = _atoi(cleaned[:-1])
        check = cleaned[-1]

        total = 0
        factor = 2
        while rut:
            total += rut % 10 * factor
            factor = 2 if factor == 7 else factor + 1
            rut //= 10

        value = 11 - total % 11
        if value == 11:
            expected = "0"
        elif value == 10:
            expected = "k"
        else:
            expected = str(value)
        return expected == check


class NidUs:
    """US social security number plausibility check."""

    def evaluate(self, nid: str) -> bool:
        digits = "".join(c for c in nid if c in _DIGITS)
        if len(digits) < 9:
            return False
        area = int(digits[0:3])
        group = int(digits[3:5])
        serial = int(digits[5:9])
        if area == 0 or group == 0 or serial == 0 or area >= 740 or area == 666:
            return False

        values = [int(c) for c in digits]
        pairs = list(zip(values, values[1:]))
        sequence = all(curr == prev + 1 for prev, curr in pairs)
        equals = all(curr == prev for prev, curr in pairs)
        return not (sequence or equals)


def nid_map() -> Dict[str, Nid]:
    """Return the validators by country code."""
    return {"us": NidUs(), "cl": NidCl()}