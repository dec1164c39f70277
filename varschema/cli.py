"""
cli.py - command-line front end
===============================

``varschema SCHEMA [DOCUMENT] [--var NAME=JSON ...] [--name NAME] [-v]``

SCHEMA and DOCUMENT are each a JSON file path or a JSON literal; DOCUMENT
defaults to standard input.  Exit status: 0 valid, 1 the document violates
the schema, 2 the schema is malformed or an input could not be read.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from . import __version__
from .errors import SchemaError, ValidationError
from .loader import load_document
from .schema import Schema
from .scope import VariableScope

EXIT_OK, EXIT_INVALID, EXIT_ERROR = 0, 1, 2

# --------------------------------------------------------------------------- #
# Parser builder                                                              #
# --------------------------------------------------------------------------- #

def _variable(text: str) -> tuple[str, Any]:
    """argparse type for ``NAME=JSON`` (non-JSON values are taken as strings)."""
    name, sep, raw = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    try:
        return name, json.loads(raw)
    except json.JSONDecodeError:
        return name, raw


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="varschema",
        description="Validate a JSON document against a varschema schema tree.",
        fromfile_prefix_chars="@",
    )
    p.add_argument("schema", help="Schema JSON file or JSON literal.")
    p.add_argument("document", nargs="?", default=None,
                   help="Document JSON file or JSON literal (default: stdin).")
    p.add_argument("--var", dest="variables", metavar="NAME=JSON", type=_variable,
                   action="append", default=[],
                   help="Pre-bind a scope variable; may be repeated.")
    p.add_argument("--name", dest="target_name", default="root",
                   help="Name used for the document in error messages.")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Log to stderr (-v info, -vv debug).")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p

# --------------------------------------------------------------------------- #
# Entry point                                                                 #
# --------------------------------------------------------------------------- #

def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("varschema.cli")

    try:
        schema = Schema.load(args.schema)
        document = load_document(args.document)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    scope = VariableScope(dict(args.variables))
    try:
        schema.validate(document, scope=scope, target_name=args.target_name)
    except SchemaError as exc:
        print(f"schema error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except ValidationError as exc:
        print(f"invalid: {exc}", file=sys.stderr)
        return EXIT_INVALID

    log.info("valid; bound variables: %s", sorted(scope))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
