"""
array.py - structural validation of arrays
==========================================

Three independent constraint groups, evaluated in this order, the first
failing group's error being the one raised:

``length``
    An exact integer or a ``{min?, max?}`` range (inclusive).

``match``
    Positional: entry *i* constrains element *i*.  An entry is either one
    schema node or a list of nodes (an OR-group) tried in declaration order;
    the first alternative that passes accepts the element, and when all of
    them fail the last alternative's error is raised.  Elements past the end
    of ``match`` are unconstrained; entries past the end of the array see an
    absent value.

``contains``
    Quantified membership independent of position.  Each entry is either
    ``{"schema": node, "required": bool, "amount": n | {min?, max?}}`` or the
    flat form where the entry is the node itself with ``required`` and
    ``amount`` next to ``type``.  The node is tried against every element and
    the successes are counted.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, Tuple

from . import utils
from .errors import AmountError, LengthError, RequiredError, SchemaError, ValidationError
from .resolver import describe, resolve, resolve_span, uses_references, within
from .scope import VariableScope
from .validator import dispatch, register

logger = logging.getLogger(__name__)

# keys that belong to a flat ``contains`` entry rather than its element schema
_CONTAINS_KEYS = ("required", "amount")


@register("array")
def check_array(schema: Mapping[str, Any], target: Sequence[Any], scope: VariableScope,
                target_name: str) -> None:
    use_refs = uses_references(schema)
    _check_length(schema, target, scope, target_name, use_refs)
    _check_match(schema, target, scope, target_name)
    _check_contains(schema, target, scope, target_name, use_refs)

# --------------------------------------------------------------------------- #
# length                                                                      #
# --------------------------------------------------------------------------- #

def _check_length(schema, target, scope, target_name, use_refs) -> None:
    if schema.get("length") is None:
        return
    bounds = resolve_span(schema["length"], scope, use_refs, schema=schema)
    if not within(len(target), bounds):
        raise LengthError(f"length must be {describe(bounds)}, got {len(target)}",
                          schema=schema, target_name=target_name, target_value=target,
                          constraint="length", expected=bounds)

# --------------------------------------------------------------------------- #
# match                                                                       #
# --------------------------------------------------------------------------- #

def _check_match(schema, target, scope, target_name) -> None:
    match = schema.get("match")
    if match is None:
        return
    if not isinstance(match, list):
        raise SchemaError(f"array 'match' must be a list, got {utils._dump(match)}",
                          schema=schema, constraint="match")

    for i, entry in enumerate(match):
        item = target[i] if i < len(target) else utils.MISSING
        item_name = target_name + f"[{i}]"
        if isinstance(entry, list):
            _match_any(entry, item, scope, item_name, schema)
        else:
            dispatch(entry, item, scope, target_name=item_name)


def _match_any(alternatives: list, item: Any, scope: VariableScope, item_name: str,
               schema: Mapping[str, Any]) -> None:
    """Accept *item* if any alternative passes, else re-raise the last failure."""
    if not alternatives:
        raise SchemaError("OR-group in 'match' must not be empty", schema=schema,
                          constraint="match")
    last_error: ValidationError | None = None
    for n, alternative in enumerate(alternatives):
        try:
            dispatch(alternative, item, scope, target_name=item_name)
            return
        except ValidationError as exc:
            logger.debug("%s: alternative %d rejected: %s", item_name, n, exc)
            last_error = exc
    raise last_error

# --------------------------------------------------------------------------- #
# contains                                                                    #
# --------------------------------------------------------------------------- #

def _contains_entry(entry: Any, schema: Mapping[str, Any], index: int) -> Tuple[Mapping[str, Any], Any, Any]:
    """Split a ``contains`` entry into (element schema, required, amount)."""
    if isinstance(entry, Mapping) and "schema" in entry:
        return entry["schema"], entry.get("required", False), entry.get("amount")
    if isinstance(entry, Mapping) and "type" in entry:
        element = {k: v for k, v in entry.items() if k not in _CONTAINS_KEYS}
        return element, entry.get("required", False), entry.get("amount")
    raise SchemaError(f"'contains[{index}]' must be an object with 'schema' or 'type'",
                      schema=schema, constraint="contains")


def _check_contains(schema, target, scope, target_name, use_refs) -> None:
    contains = schema.get("contains")
    if contains is None:
        return
    if not isinstance(contains, list):
        raise SchemaError(f"array 'contains' must be a list, got {utils._dump(contains)}",
                          schema=schema, constraint="contains")

    for i, entry in enumerate(contains):
        element, required_raw, amount_raw = _contains_entry(entry, schema, i)
        field = f"contains[{i}]"
        # an entry that sets its own use$ owns its required/amount references
        entry_refs = uses_references(entry) or use_refs
        required = resolve(required_raw, scope, "boolean", entry_refs, schema=schema,
                           field=f"{field}.required")
        bounds = None
        if amount_raw is not None:
            bounds = resolve_span(amount_raw, scope, entry_refs, schema=schema,
                                  field=f"{field}.amount")

        count = 0
        for j, item in enumerate(target):
            try:
                dispatch(element, item, scope, target_name=target_name + f"[{j}]")
            except ValidationError:
                continue
            count += 1
        logger.debug("%s: %s matched %d of %d elements", target_name, field, count, len(target))

        if bounds is not None:
            if not within(count, bounds):
                raise AmountError(
                    f"must contain {describe(bounds)} elements matching "
                    f"{utils._dump(element)}, found {count}",
                    schema=schema, target_name=target_name, target_value=target,
                    constraint="amount", expected=bounds,
                )
        elif required and count == 0:
            raise RequiredError(f"must contain an element matching {utils._dump(element)}",
                                schema=schema, target_name=target_name, target_value=target,
                                constraint="contains", expected=element)
