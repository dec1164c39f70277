"""
errors.py - exception taxonomy shared by every validator
=========================================================

Two families hang off :class:`ValidatorError`:

* :class:`SchemaError` - the *schema* is malformed (unknown type, unresolved
  variable reference, heterogeneous ``match`` list ...).  Independent of the
  data; retrying with another value will not help.
* :class:`ValidationError` - the *value* violates a well-formed schema.
  Concrete kinds: :class:`RequiredError`, :class:`TypeMismatch`,
  :class:`MatchError`, :class:`LengthError`, :class:`AmountError`.

Every instance carries the offending schema node, the target's name and
value, and the violated constraint so callers can build their own messages.
"""

from __future__ import annotations

from typing import Any, Mapping

from . import utils

__all__ = [
    "ValidatorError",
    "SchemaError",
    "ValidationError",
    "RequiredError",
    "TypeMismatch",
    "MatchError",
    "LengthError",
    "AmountError",
]

# --------------------------------------------------------------------------- #
# Base class                                                                  #
# --------------------------------------------------------------------------- #

class ValidatorError(ValueError):
    """Root of every exception raised by :func:`varschema.validate`."""

    def __init__(
        self,
        message: str,
        *,
        schema: Mapping[str, Any] | None = None,
        target_name: str | None = None,
        target_value: Any = utils.MISSING,
        constraint: str | None = None,
        expected: Any = None,
    ):
        self.message = message
        self.schema = schema
        self._target_name = target_name
        self.target_value = target_value
        self.constraint = constraint
        self.expected = expected
        super().__init__(message)

    @property
    def target_name(self) -> str | None:
        # default names render the target only when someone reads them
        return None if self._target_name is None else str(self._target_name)

    def __str__(self) -> str:
        name = self.target_name
        return f"{name}: {self.message}" if name else self.message

    @property
    def schema_json(self) -> str:
        """Deterministic JSON rendering of the offending schema node."""
        return utils._dump(self.schema)


class SchemaError(ValidatorError):
    """Raised when the schema itself is malformed (an authoring bug)."""


class ValidationError(ValidatorError):
    """Raised when a value violates a well-formed schema."""


# --------------------------------------------------------------------------- #
# Data failures                                                               #
# --------------------------------------------------------------------------- #

class RequiredError(ValidationError):
    """A required value is absent."""


class TypeMismatch(ValidationError, TypeError):
    """The value's runtime kind differs from the schema's ``type``."""


class MatchError(ValidationError):
    """The value fails an exact, enumeration or range ``match``."""


class LengthError(ValidationError):
    """An array or string length is outside the ``length`` bound."""


class AmountError(ValidationError):
    """A ``contains`` entry matched the wrong number of elements."""
