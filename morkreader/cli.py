# -*- coding: utf-8 -*-
"""Location: ./morkreader/cli.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Mork Reader CLI Commands.
This module provides the ``morkreader`` command line tool:
- ``dump``: decode a Mork file and print its dictionaries, tables and rows as text or JSON
- ``tables``: list the tables of a Mork file with their row counts

Examples:
    >>> parser = create_parser()
    >>> args = parser.parse_args(["dump", "abook.mab", "--format", "json", "--default-scope", "81"])
    >>> (args.command, args.format, args.default_scope)
    ('dump', 'json', 129)
"""

# Standard
import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional

# First-Party
from morkreader import __version__
from morkreader.config import settings
from morkreader.dump import dump_json, dump_text
from morkreader.errors import MorkError
from morkreader.parser import open_mork

logger = logging.getLogger(__name__)


def _hex_scope(text: str) -> int:
    """Parse a ``--default-scope`` argument written in hex.

    Args:
        text: Hex digits, optionally prefixed with ``0x``.

    Returns:
        The scope as an integer.

    Raises:
        argparse.ArgumentTypeError: If the text is not a positive hex number.

    Examples:
        >>> _hex_scope("80")
        128
        >>> _hex_scope("0x80")
        128
    """
    try:
        value = int(text, 16)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid hex scope: {text!r}") from e
    if value <= 0:
        raise argparse.ArgumentTypeError("scope must be positive")
    return value


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from settings.

    Args:
        verbose: Force DEBUG level.
    """
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=settings.log_format, datefmt="%Y-%m-%dT%H:%M:%S")


def dump_command(args: argparse.Namespace) -> int:
    """Execute the dump command.

    Args:
        args: Parsed command line arguments

    Returns:
        Process exit status.
    """
    try:
        db = open_mork(args.input_file, default_scope=args.default_scope)
    except MorkError as e:
        print(f"❌ Failed to read {args.input_file}: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        payload = dump_json(db)
    else:
        payload = dump_text(db).encode("utf-8")

    if args.output:
        output_file = Path(args.output)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_bytes(payload)
        print(f"✅ Wrote {args.format} dump to {output_file}")
    else:
        sys.stdout.write(payload.decode("utf-8"))
        if args.format == "json":
            sys.stdout.write("\n")
    return 0


def tables_command(args: argparse.Namespace) -> int:
    """Execute the tables command.

    Args:
        args: Parsed command line arguments

    Returns:
        Process exit status.
    """
    try:
        db = open_mork(args.input_file, default_scope=args.default_scope)
    except MorkError as e:
        print(f"❌ Failed to read {args.input_file}: {e}", file=sys.stderr)
        return 1

    print(f"{'SCOPE':>8}  {'TABLE':>8}  {'ROWS':>6}")
    for table_scope in db.table_scopes():
        table_map = db.get_tables(table_scope)
        for table_id in sorted(table_map):
            row_count = sum(len(rows) for rows in table_map[table_id].values())
            print(f"{table_scope:>8X}  {table_id:>8X}  {row_count:>6}")
    if args.verbose:
        print(f"\n{len(db.columns)} columns, {len(db.values)} values, {db.row_count} distinct rows")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the morkreader tool.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(prog="morkreader", description="Read Mozilla Mork database files")
    parser.add_argument("--version", "-V", action="version", version=f"morkreader {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    dump_parser = subparsers.add_parser("dump", help="Dump dictionaries, tables and rows")
    dump_parser.add_argument("input_file", help="Mork file to read")
    dump_parser.add_argument("--format", "-f", choices=["text", "json"], default="text", help="Output format (default: text)")
    dump_parser.add_argument("--output", "--out", "-o", help="Write the dump to this file instead of stdout")
    dump_parser.add_argument("--default-scope", type=_hex_scope, default=None, help="Hex scope substituted for zero/absent scopes (default: MORK_DEFAULT_SCOPE or 80)")
    dump_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    dump_parser.set_defaults(func=dump_command)

    tables_parser = subparsers.add_parser("tables", help="List tables and their row counts")
    tables_parser.add_argument("input_file", help="Mork file to read")
    tables_parser.add_argument("--default-scope", type=_hex_scope, default=None, help="Hex scope substituted for zero/absent scopes (default: MORK_DEFAULT_SCOPE or 80)")
    tables_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    tables_parser.set_defaults(func=tables_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``.

    Returns:
        Process exit status.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    configure_logging(args.verbose)
    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\n❌ Operation cancelled by user", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
