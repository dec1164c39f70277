"""
scalar.py - constraint checks for primitive schema types.

Types: ``any``, ``null``, ``function``, ``boolean``, ``number``, ``integer``
and ``string``.  The shared required/type protocol and ``$`` binding already
ran in :func:`varschema.validator.dispatch`; these functions only look at
``match`` (and ``length`` for strings).
"""
from __future__ import annotations

from typing import Any, Mapping

from . import utils
from .errors import LengthError, MatchError, SchemaError
from .resolver import describe, resolve, resolve_range, resolve_span, uses_references, within
from .scope import VariableScope
from .validator import register


@register("any", "null", "function")
def check_plain(schema: Mapping[str, Any], target: Any, scope: VariableScope, target_name: str) -> None:
    """Nothing beyond the type check."""


@register("boolean")
def check_boolean(schema: Mapping[str, Any], target: Any, scope: VariableScope, target_name: str) -> None:
    if schema.get("match") is None:
        return
    expected = resolve(schema["match"], scope, "boolean", uses_references(schema),
                       schema=schema, field="match")
    if target is not expected:
        raise MatchError(f"must be {utils._dump(expected)}", schema=schema,
                         target_name=target_name, target_value=target,
                         constraint="match", expected=expected)

# --------------------------------------------------------------------------- #
# Numbers                                                                     #
# --------------------------------------------------------------------------- #

def _check_numeric(schema: Mapping[str, Any], target: Any, scope: VariableScope,
                   target_name: str, kind: str) -> None:
    match = schema.get("match")
    if match is None:
        return
    use_refs = uses_references(schema)

    def fail(message: str, expected: Any) -> MatchError:
        return MatchError(message, schema=schema, target_name=target_name,
                          target_value=target, constraint="match", expected=expected)

    # enumeration or list of ranges -----------------------------------------
    if isinstance(match, list):
        is_range = [isinstance(entry, Mapping) for entry in match]
        if any(is_range) and not all(is_range):
            raise SchemaError("cannot mix values and ranges in a single match list",
                              schema=schema, constraint="match")

        if match and all(is_range):
            ranges = [resolve_range(entry, scope, "number", use_refs, schema=schema,
                                    field=f"match[{i}]")
                      for i, entry in enumerate(match)]
            if not any(within(target, bounds) for bounds in ranges):
                raise fail(f"must be {' or '.join(describe(b) for b in ranges)}", ranges)
            return

        values = [resolve(entry, scope, "number", use_refs, schema=schema, field=f"match[{i}]")
                  for i, entry in enumerate(match)]
        if target not in values:
            raise fail(f"must be one of {utils._dump(values)}", values)
        return

    # single range ----------------------------------------------------------
    if isinstance(match, Mapping):
        lo, hi = resolve_range(match, scope, kind, use_refs, schema=schema, field="match")
        if lo is not None and target < lo:
            raise fail(f"must be higher or equal {lo}", (lo, hi))
        if hi is not None and target > hi:
            raise fail(f"must be lower or equal {hi}", (lo, hi))
        return

    # exact value -----------------------------------------------------------
    expected = resolve(match, scope, kind, use_refs, schema=schema, field="match")
    if target != expected:
        raise fail(f"must be {expected}", expected)


@register("number")
def check_number(schema: Mapping[str, Any], target: Any, scope: VariableScope, target_name: str) -> None:
    _check_numeric(schema, target, scope, target_name, "number")


@register("integer")
def check_integer(schema: Mapping[str, Any], target: Any, scope: VariableScope, target_name: str) -> None:
    _check_numeric(schema, target, scope, target_name, "integer")

# --------------------------------------------------------------------------- #
# Strings                                                                     #
# --------------------------------------------------------------------------- #

@register("string")
def check_string(schema: Mapping[str, Any], target: Any, scope: VariableScope, target_name: str) -> None:
    use_refs = uses_references(schema)

    if schema.get("length") is not None:
        bounds = resolve_span(schema["length"], scope, use_refs, schema=schema)
        if not within(len(target), bounds):
            raise LengthError(f"length must be {describe(bounds)}, got {len(target)}",
                              schema=schema, target_name=target_name, target_value=target,
                              constraint="length", expected=bounds)

    match = schema.get("match")
    if match is None:
        return
    if isinstance(match, list):
        values = [resolve(entry, scope, "string", use_refs, schema=schema, field=f"match[{i}]")
                  for i, entry in enumerate(match)]
        if target not in values:
            raise MatchError(f"must be one of {utils._dump(values)}", schema=schema,
                             target_name=target_name, target_value=target,
                             constraint="match", expected=values)
        return

    expected = resolve(match, scope, "string", use_refs, schema=schema, field="match")
    if target != expected:
        raise MatchError(f"must be {expected!r}", schema=schema, target_name=target_name,
                         target_value=target, constraint="match", expected=expected)
