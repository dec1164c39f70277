"""
loader.py - read schema trees and target documents from JSON sources.

Public API
----------
load_schema(source)   : schema mapping from a Mapping / Path / path string / JSON literal
load_document(source) : any JSON value from the same sources, or stdin when None
"""

from __future__ import annotations

import copy
import json
import sys
from pathlib import Path
from typing import Any, Mapping

from .errors import SchemaError

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _read(path: Path) -> Any:
    """Read & parse a JSON file, raising crisp errors on failure."""
    try:
        with path.open(encoding="utf-8") as fd:
            return json.load(fd)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _from_string(text: str) -> Any:
    """Existing file path → load; else JSON literal → load."""
    p = Path(text)
    try:
        if p.is_file():
            return _read(p)
    except OSError:
        pass  # not a usable path (too long, bad characters), try JSON
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        if text.strip().startswith(("{", "[", '"')) or text.strip() in ("", "null", "true", "false"):
            raise ValueError(f"Invalid JSON literal: {exc}") from exc
        raise FileNotFoundError(f"File not found: {text}") from exc

# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def load_document(source: None | str | Path | Any = None) -> Any:
    """Return the JSON value held by *source*.

    * ``None``  - read standard input.
    * ``Path``  - JSON file on disk.
    * ``str``   - existing file path, else a JSON literal.
    * anything else is returned as a deep copy.
    """
    if source is None:
        text = sys.stdin.read()
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON on stdin: {exc}") from exc
    if isinstance(source, Path):
        return _read(source)
    if isinstance(source, str):
        return _from_string(source)
    return copy.deepcopy(source)


def load_schema(source: str | Path | Mapping[str, Any]) -> dict:
    """Return a fresh copy of the schema tree held by *source*."""
    if isinstance(source, Mapping):
        schema = copy.deepcopy(dict(source))
    elif isinstance(source, (str, Path)):
        schema = load_document(source)
    else:
        raise TypeError(f"Unsupported schema source: {type(source)}")

    if not isinstance(schema, dict) or "type" not in schema:
        raise SchemaError(f"Schema root must be an object with a 'type', got {type(schema).__name__}",
                          schema=schema if isinstance(schema, dict) else None,
                          constraint="type")
    return schema
