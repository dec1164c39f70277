"""
varschema – declarative, recursive validation of loosely-typed data with
cross-field variable references.
"""
import logging

__version__ = "1.0.0"

from .utils import MISSING
from .errors import (
    AmountError,
    LengthError,
    MatchError,
    RequiredError,
    SchemaError,
    TypeMismatch,
    ValidationError,
    ValidatorError,
)
from .scope import VariableScope
from .validator import validate
from .schema import Schema

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MISSING",
    "Schema",
    "VariableScope",
    "validate",
    "ValidatorError",
    "SchemaError",
    "ValidationError",
    "RequiredError",
    "TypeMismatch",
    "MatchError",
    "LengthError",
    "AmountError",
]
