"""
schema.py - High-level API around a loaded schema tree.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from . import loader
from . import utils
from . import validator
from .errors import ValidationError
from .scope import VariableScope

logger = logging.getLogger(__name__)


class Schema:
    """A loaded schema tree with convenience validation helpers."""

    def __init__(self, root: Mapping[str, Any]):
        self.root = root

    @classmethod
    def load(cls, source: str | Path | Mapping[str, Any]) -> "Schema":
        """Loads a schema tree from a mapping, JSON file or JSON literal."""
        return cls(loader.load_schema(source))

    def validate(
        self,
        value: Any = utils.MISSING,
        *,
        scope: VariableScope | None = None,
        target_name: str | None = "root",
    ) -> bool:
        """Validate *value*; returns True or raises the first violation."""
        return validator.validate(self.root, value, scope, target_name=target_name)

    def is_valid(self, value: Any = utils.MISSING, *, scope: VariableScope | None = None) -> bool:
        """Like :meth:`validate` but returns False on data failures.

        Schema errors still propagate: they say nothing about *value*.
        """
        try:
            return self.validate(value, scope=scope)
        except ValidationError as exc:
            logger.debug("invalid: %s", exc)
            return False

    def validate_records(self, frame: pd.DataFrame) -> int:
        """Validate every row of *frame* as an object, each with a fresh scope.

        Missing cells (NaN / None / NA) are treated as absent fields.
        Returns the number of rows validated.
        """
        if not isinstance(frame, pd.DataFrame):
            raise TypeError(f"validate_records expects a DataFrame, got {type(frame).__name__}")
        # to_dict boxes numpy scalars into native Python values
        for index, row in zip(frame.index, frame.to_dict(orient="records")):
            record = {
                str(column): cell
                for column, cell in row.items()
                if not (pd.api.types.is_scalar(cell) and pd.isna(cell))
            }
            validator.validate(self.root, record, VariableScope(), target_name=f"row[{index}]")
        return len(frame)
