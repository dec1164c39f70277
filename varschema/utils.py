"""
utils.py - shared, low-level utilities for the varschema package.

This module consolidates common helpers for:
- The ``MISSING`` sentinel (an absent value, distinct from ``None``)
- Runtime kind checks (``number``, ``integer``, ``string`` ...)
- Variable reference syntax
- Deterministic rendering of schemas and targets for error messages
"""

from __future__ import annotations

import json
import math
import numbers
from collections.abc import Mapping
from typing import Any, Callable, Dict

# --------------------------------------------------------------------------- #
# Absent values                                                               #
# --------------------------------------------------------------------------- #

class _Missing:
    """Singleton marking an absent value (JavaScript's ``undefined``)."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING = _Missing()

# --------------------------------------------------------------------------- #
# Type Checking Helpers                                                       #
# --------------------------------------------------------------------------- #

def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    """True for finite numbers without a fractional part (``2.0`` included)."""
    if not _is_number(value):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return math.isfinite(value) and math.trunc(value) == value


_TYPE_MAP: Dict[str, Callable[[Any], bool]] = {
    "any":      lambda v: True,
    "null":     lambda v: v is None,
    "function": callable,
    "boolean":  lambda v: isinstance(v, bool),
    "integer":  _is_integer,
    "number":   _is_number,
    "string":   lambda v: isinstance(v, str),
    "array":    lambda v: isinstance(v, (list, tuple)),
    "object":   lambda v: isinstance(v, Mapping),
}


def _is_kind(value: Any, kind: str) -> bool:
    """Return True iff *value* has the runtime *kind* named by a schema type."""
    check = _TYPE_MAP.get(kind)
    if check is None:
        raise KeyError(kind)
    return bool(check(value))

# --------------------------------------------------------------------------- #
# Variable references                                                         #
# --------------------------------------------------------------------------- #

SIGIL = "$"


def _is_reference(raw: Any) -> bool:
    """A reference is a string that starts with the sigil and names something."""
    return isinstance(raw, str) and raw.startswith(SIGIL) and len(raw) > len(SIGIL)


def _var_key(name: str) -> str:
    """Normalise a binding name to its canonical ``$name`` form."""
    return name if name.startswith(SIGIL) else SIGIL + name

# --------------------------------------------------------------------------- #
# Rendering                                                                   #
# --------------------------------------------------------------------------- #

def _json_safe(x: Any, _active: frozenset = frozenset()) -> Any:
    """Recursively prepare an object for deterministic JSON rendering.

    A container that (indirectly) holds itself renders as ``"<cycle>"``.
    """
    if isinstance(x, (Mapping, list, tuple)):
        if id(x) in _active:
            return "<cycle>"
        _active = _active | {id(x)}
    if isinstance(x, Mapping):
        return {str(k): _json_safe(v, _active) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_json_safe(v, _active) for v in x]
    if x is MISSING:
        return "<missing>"
    if isinstance(x, (str, bool, type(None))):
        return x
    if _is_number(x):
        return x if math.isfinite(x) else str(x)
    if callable(x):
        return f"<function {getattr(x, '__qualname__', type(x).__name__)}>"
    return repr(x)


def _dump(obj: Any) -> str:
    """Return a deterministic, compact JSON string for *obj*."""
    return json.dumps(_json_safe(obj), sort_keys=True, separators=(",", ":"))


def _render(value: Any) -> str:
    """Default target name: strings verbatim, everything else as JSON."""
    if isinstance(value, str):
        return value
    return _dump(value)


class _LazyName:
    """Default target name, rendered from the root value only when needed.

    Child names are built with ``name + "[0]"`` / ``name + ".key"`` exactly
    like plain strings, so validating never pays for rendering the data.
    """

    __slots__ = ("_value", "_suffix")

    def __init__(self, value: Any, suffix: str = ""):
        self._value = value
        self._suffix = suffix

    def __add__(self, suffix: str) -> "_LazyName":
        return _LazyName(self._value, self._suffix + suffix)

    def __str__(self) -> str:
        return _render(self._value) + self._suffix

    def __repr__(self) -> str:
        return f"_LazyName({self._suffix!r})"
