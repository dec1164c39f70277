"""
scope.py - the per-validation variable scope.
"""
from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator, Mapping

from . import utils
from .errors import SchemaError

logger = logging.getLogger(__name__)


class VariableScope(dict):
    """Mapping of ``$name`` to the most recently validated value bound under it.

    One scope is created per top-level :func:`varschema.validate` call and
    passed by reference through the whole recursive descent.  Do not share an
    instance between independent validations.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None, **kwargs: Any):
        super().__init__()
        for name, value in dict(initial or {}, **kwargs).items():
            self.bind(name, value)

    def bind(self, name: str, value: Any) -> None:
        """Bind *value* under *name*; last write wins."""
        key = utils._var_key(name)
        logger.debug("bind %s = %r", key, value)
        self[key] = value

    def lookup(self, ref: str, *, schema: Mapping[str, Any] | None = None) -> Any:
        """Return the value bound under *ref*, raising :class:`SchemaError` if unbound."""
        key = utils._var_key(ref)
        try:
            return self[key]
        except KeyError:
            raise SchemaError(
                f"variable '{key}' is not bound (bound: {sorted(self)})",
                schema=schema,
                constraint="reference",
                expected=key,
            ) from None

    @contextlib.contextmanager
    def checkpoint(self) -> Iterator["VariableScope"]:
        """Undo every binding made inside the block if the block raises."""
        saved = dict(self)
        try:
            yield self
        except BaseException:
            self.clear()
            self.update(saved)
            raise
