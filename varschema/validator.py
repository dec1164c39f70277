"""
validator.py - type dispatch and the shared required/type protocol
==================================================================

Every schema node carries a ``type`` tag.  Each tag maps to one registered
check function (see :mod:`varschema.scalar`, :mod:`varschema.array` and
:mod:`varschema.objects`); this module owns the part every type has in
common:

1. an absent value (:data:`~varschema.utils.MISSING`) passes unless the
   node's ``required`` (possibly a variable reference) resolves to true;
2. a present value must have the runtime kind named by ``type``;
3. the type-specific constraints run;
4. on success, ``$`` binds the value into the variable scope.

Public API
----------
validate(schema, value=MISSING, scope=None, *, target_name=None) -> True
    Entry point.  Raises the first :class:`~varschema.errors.ValidatorError`
    encountered in depth-first, left-to-right order.

dispatch(schema, value, scope, *, target_name=None) -> True
    The recursive step, used by container validators for nested nodes.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from . import utils
from .errors import RequiredError, SchemaError, TypeMismatch
from .resolver import resolve, uses_references
from .scope import VariableScope

__all__ = ["validate", "dispatch", "register", "registered_types"]

Check = Callable[[Mapping[str, Any], Any, VariableScope, str], None]

_VALIDATORS: Dict[str, Check] = {}

# types whose checks recurse and may bind variables on behalf of descendants
_CONTAINERS = {"array", "object"}

# --------------------------------------------------------------------------- #
# Registry                                                                    #
# --------------------------------------------------------------------------- #

def register(*type_names: str) -> Callable[[Check], Check]:
    """Decorator registering a check function for one or more type tags."""
    def deco(fn: Check) -> Check:
        for name in type_names:
            _VALIDATORS[name] = fn
        return fn
    return deco


def registered_types() -> list[str]:
    return sorted(_VALIDATORS)

# --------------------------------------------------------------------------- #
# Core recursive step                                                         #
# --------------------------------------------------------------------------- #

def dispatch(
    schema: Mapping[str, Any],
    value: Any,
    scope: VariableScope,
    *,
    target_name: str | None = None,
) -> bool:
    """Validate *value* against one schema node, recursing as needed."""
    if not isinstance(schema, Mapping):
        raise SchemaError(f"schema node must be an object, got {utils._dump(schema)}",
                          schema=None, constraint="type")

    stype = schema.get("type")
    check = _VALIDATORS.get(stype) if isinstance(stype, str) else None
    if check is None:
        raise SchemaError(f"unknown schema type {stype!r}; expected one of {registered_types()}",
                          schema=schema, constraint="type", expected=registered_types())

    binding = schema.get("$")
    if binding is not None and (not isinstance(binding, str) or not binding):
        raise SchemaError(f"'$' must be a non-empty string, got {binding!r}",
                          schema=schema, constraint="$", expected="string")

    if target_name is None:
        target_name = utils._LazyName(value)
    use_refs = uses_references(schema)

    # 1) required -----------------------------------------------------------
    if value is utils.MISSING:
        required = resolve(schema.get("required", False), scope, "boolean", use_refs,
                           schema=schema, field="required")
        if required:
            raise RequiredError(f"{stype} is required", schema=schema,
                                target_name=target_name, target_value=value,
                                constraint="required", expected=True)
        return True

    # 2) type ---------------------------------------------------------------
    if not utils._is_kind(value, stype):
        raise TypeMismatch(
            f"expected {stype}, got {type(value).__name__}",
            schema=schema, target_name=target_name, target_value=value,
            constraint="type", expected=stype,
        )

    # 3) type-specific constraints ------------------------------------------
    if stype in _CONTAINERS:
        with scope.checkpoint():
            check(schema, value, scope, target_name)
    else:
        check(schema, value, scope, target_name)

    # 4) binding ------------------------------------------------------------
    if binding is not None:
        scope.bind(binding, value)
    return True


def validate(
    schema: Mapping[str, Any],
    value: Any = utils.MISSING,
    scope: VariableScope | None = None,
    *,
    target_name: str | None = None,
) -> bool:
    """Assert that *value* satisfies *schema*; return ``True`` or raise.

    When *scope* is omitted a fresh, single-use :class:`VariableScope` is
    created.  Pass your own scope to pre-bind variables or to read bindings
    back afterwards.
    """
    if scope is None:
        scope = VariableScope()
    return dispatch(schema, value, scope, target_name=target_name)


# Populate the registry.  Imported last: the type modules import ``register``
# and ``dispatch`` from here.
from . import scalar, array, objects  # noqa: E402,F401
