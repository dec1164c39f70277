"""
resolver.py - resolve constraint values that may be variable references
=======================================================================

Every schema constraint that can be parameterised by an earlier sibling
(``required``, scalar ``match`` entries and bounds, array ``length`` and
``amount``) goes through :func:`resolve`.  A constraint is a *reference* when
the owning node sets ``use$`` and the raw value is a string starting with
``$``; it is then looked up in the :class:`~varschema.scope.VariableScope`.
Anything else is a literal.  Either way the resulting value must have the
expected kind, otherwise the *schema* is at fault and :class:`SchemaError`
is raised.
"""

from __future__ import annotations

from typing import Any, Mapping, Tuple

from . import utils
from .errors import SchemaError
from .scope import VariableScope

__all__ = ["resolve", "resolve_range", "resolve_span", "uses_references", "within", "describe"]

Range = Tuple[Any, Any]


def uses_references(schema: Mapping[str, Any]) -> bool:
    """True when string constraints of *schema* are variable references."""
    flag = schema.get("use$", False)
    if not isinstance(flag, bool):
        raise SchemaError(f"'use$' must be a boolean, got {flag!r}",
                          schema=schema, constraint="use$", expected="boolean")
    return flag


def resolve(
    raw: Any,
    scope: VariableScope,
    expected: str,
    use_references: bool,
    *,
    schema: Mapping[str, Any] | None = None,
    field: str = "value",
) -> Any:
    """Return the literal or referenced value of *raw*, checked against *expected*."""
    if use_references and utils._is_reference(raw):
        value = scope.lookup(raw, schema=schema)
        if not utils._is_kind(value, expected):
            raise SchemaError(
                f"'{field}' references {raw} = {utils._dump(value)}, expected {expected}",
                schema=schema, constraint=field, expected=expected,
            )
        return value

    if not utils._is_kind(raw, expected):
        raise SchemaError(
            f"'{field}' must be {expected}, got {utils._dump(raw)}",
            schema=schema, constraint=field, expected=expected,
        )
    return raw


def resolve_range(
    raw: Any,
    scope: VariableScope,
    expected: str,
    use_references: bool,
    *,
    schema: Mapping[str, Any] | None = None,
    field: str = "range",
) -> Range:
    """Resolve a ``{min?, max?}`` object; absent bounds come back as ``None``."""
    if not isinstance(raw, Mapping):
        raise SchemaError(f"'{field}' must be a {{min, max}} object, got {utils._dump(raw)}",
                          schema=schema, constraint=field, expected="range")
    unknown = sorted(str(k) for k in raw if k not in ("min", "max"))
    if unknown:
        raise SchemaError(f"'{field}' accepts only min and max, got {unknown}",
                          schema=schema, constraint=field, expected="range")
    bounds = []
    for key in ("min", "max"):
        if raw.get(key) is None:
            bounds.append(None)
        else:
            bounds.append(resolve(raw[key], scope, expected, use_references,
                                  schema=schema, field=f"{field}.{key}"))
    return bounds[0], bounds[1]


def within(value: Any, bounds: Range) -> bool:
    """Inclusive check of *value* against resolved ``(min, max)`` bounds."""
    lo, hi = bounds
    if lo is not None and value < lo:
        return False
    if hi is not None and value > hi:
        return False
    return True


def resolve_span(
    raw: Any,
    scope: VariableScope,
    use_references: bool,
    *,
    schema: Mapping[str, Any] | None = None,
    field: str = "length",
) -> Range:
    """Resolve a count constraint: an exact integer ``n`` becomes ``(n, n)``."""
    if isinstance(raw, Mapping):
        return resolve_range(raw, scope, "integer", use_references, schema=schema, field=field)
    exact = resolve(raw, scope, "integer", use_references, schema=schema, field=field)
    return exact, exact


def describe(bounds: Range) -> str:
    """Human readable rendering of resolved bounds."""
    lo, hi = bounds
    if lo is not None and lo == hi:
        return f"exactly {lo}"
    if lo is not None and hi is not None:
        return f"between {lo} and {hi}"
    if lo is not None:
        return f"at least {lo}"
    if hi is not None:
        return f"at most {hi}"
    return "anything"
