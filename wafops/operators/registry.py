"""Lookup of operators by the names rules use for them."""

from __future__ import annotations

from typing import Dict, Type

from .base import NoMatch, Operator, UnconditionalMatch
from .comparison import (
    BeginsWith,
    Contains,
    EndsWith,
    Eq,
    Ge,
    Gt,
    Le,
    Lt,
    Streq,
    Within,
)
from .external import InspectFile
from .matching import IpMatch, IpMatchFromFile, Pm, PmFromFile, Rx
from .unicode_check import ValidateUtf8Encoding
from .validate_nid import ValidateNid
from .validation import ValidateByteRange, ValidateUrlEncoding

_OPERATORS: Dict[str, Type[Operator]] = {
    "beginsWith": BeginsWith,
    "rx": Rx,
    "eq": Eq,
    "contains": Contains,
    "endsWith": EndsWith,
    "inspectFile": InspectFile,
    "ge": Ge,
    "gt": Gt,
    "le": Le,
    "lt": Lt,
    "unconditionalMatch": UnconditionalMatch,
    "within": Within,
    "pmFromFile": PmFromFile,
    "pm": Pm,
    "validateByteRange": ValidateByteRange,
    "validateUrlEncoding": ValidateUrlEncoding,
    "streq": Streq,
    "ipMatch": IpMatch,
    "ipMatchFromFile": IpMatchFromFile,
    "validateUtf8Encoding": ValidateUtf8Encoding,
    "noMatch": NoMatch,
    "validateNid": ValidateNid,
}


def operators_map() -> Dict[str, Type[Operator]]:
    """Return a fresh mapping from operator name to operator class."""
    return dict(_OPERATORS)


def new_operator(name: str, data: str = "") -> Operator:
    """Create the operator called *name* with argument *data*.

    Raises KeyError for an unknown name.
    """
    try:
        cls = _OPERATORS[name]
    except KeyError:
        raise KeyError(f"unknown operator {name!r}") from None
    return cls(data)