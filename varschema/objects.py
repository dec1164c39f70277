"""
objects.py - field-wise validation of mappings.

``match`` maps field names to schema nodes.  Fields are checked in declaration
order, so a field may reference a variable bound by a field declared before
it; a field that is not present is checked as an absent value.  With
``strict: true`` keys not declared in ``match`` are rejected.
"""
from __future__ import annotations

from typing import Any, Mapping

from . import utils
from .errors import MatchError, SchemaError
from .scope import VariableScope
from .validator import dispatch, register


@register("object")
def check_object(schema: Mapping[str, Any], target: Mapping[str, Any], scope: VariableScope,
                 target_name: str) -> None:
    fields = schema.get("match")
    strict = schema.get("strict", False)
    if not isinstance(strict, bool):
        raise SchemaError(f"'strict' must be a boolean, got {strict!r}", schema=schema,
                          constraint="strict", expected="boolean")
    if fields is None:
        if strict and target:
            raise MatchError(f"unexpected fields {sorted(map(str, target))}", schema=schema,
                             target_name=target_name, target_value=target,
                             constraint="strict", expected=[])
        return
    if not isinstance(fields, Mapping):
        raise SchemaError(f"object 'match' must map field names to schemas, got {utils._dump(fields)}",
                          schema=schema, constraint="match")

    if strict:
        extras = set(target) - set(fields)
        if extras:
            raise MatchError(f"unexpected fields {sorted(map(str, extras))}", schema=schema,
                             target_name=target_name, target_value=target,
                             constraint="strict", expected=sorted(fields))

    for key, field_schema in fields.items():
        dispatch(field_schema, target.get(key, utils.MISSING), scope,
                 target_name=target_name + f".{key}")
