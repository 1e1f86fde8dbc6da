# -*- coding: utf-8 -*-
"""Location: ./morkreader/parser.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Mork Decoder.

Recursive-descent decoder for the Mork text format used by legacy Mozilla
address books and history files. A Mork buffer is a sequence of top-level
terms:

1. ``< ... >`` dictionary blocks declaring column names (after the
   ``<(a=c)>`` marker) or literal values
2. ``{ id:scope ... }`` tables holding rows and bare row references
3. ``[ id:scope (col=value) ... ]`` rows
4. ``@ ... @`` group regions, skipped as opaque
5. ``//`` comments running to the end of the line

Cells inside rows either reference a value dictionary entry (``(^83^90)``)
or carry an inline literal (``(^83=Alice)``). Inline literals are interned
under synthetic ids counting down from ``INTERNED_ID_CEILING``, so they never
collide with the small ascending ids declared in dictionaries.

Table and row ids are stored by magnitude: ``[-1:^80]`` and ``[1:^80]``
address the same row.

Examples:
    >>> db = decode(b"< <(a=c)> (83=FirstName)> {1:^80 [1(^83=Alice)]}")
    >>> rows = db.get_rows(0x80, db.get_tables(0x80)[1])
    >>> db.resolve_cells(rows[1])
    {'FirstName': 'Alice'}
    >>> parser = MorkParser()
    >>> parser.parse(b"%")
    False
    >>> parser.error
    <MorkErrorKind.MALFORMED_INPUT: 'malformed_input'>
"""

# Standard
from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

# First-Party
from morkreader.config import settings
from morkreader.database import MorkDatabase, RowMap, RowScopeMap, TableMap
from morkreader.errors import MalformedInputError, MorkError, MorkErrorKind
from morkreader.ids import parse_hex, parse_scope_id, ScopedId
from morkreader.scanner import Cursor, END, is_whitespace
from morkreader.source import read_mork_source

logger = logging.getLogger(__name__)

# Interned literal ids are allocated below this value, one per literal.
INTERNED_ID_CEILING = 0x7FFFFFFF

# Marker switching a dictionary block from literal values to column names.
COLUMN_DICT_MARKER = "<(a=c)>"

_TABLE_ID_STOP = frozenset("{[}")
_ROW_ID_STOP = frozenset("([]")
_LINE_END = frozenset("\r\n")


class ParseMode(Enum):
    """Where a completed cell is stored."""

    COLUMNS = "columns"
    VALUES = "values"
    ROWS = "rows"


class TermKind(Enum):
    """Top-level constructs, keyed by their opening character."""

    DICT = "<"
    COMMENT = "/"
    TABLE = "{"
    ROW = "["
    GROUP = "@"


_TERM_KINDS = {kind.value: kind for kind in TermKind}

Cells = Dict[int, int]


@dataclass
class ParseContext:
    """Mutable state of one decode pass, threaded through every decoder."""

    cursor: Cursor
    default_scope: int
    text_encoding: str = "utf-8"
    encoding_errors: str = "replace"
    mode: ParseMode = ParseMode.VALUES
    current_row: Optional[Cells] = None
    next_interned_id: int = INTERNED_ID_CEILING
    columns: Dict[int, str] = field(default_factory=dict)
    values: Dict[int, str] = field(default_factory=dict)
    tables: Dict[int, Dict[int, Dict[int, Dict[int, Cells]]]] = field(default_factory=dict)
    # Row storage by (row scope, row id); tables hold references into it.
    rows: Dict[Tuple[int, int], Cells] = field(default_factory=dict)

    def malformed(self, message: str, char: str) -> MalformedInputError:
        """Build a MalformedInputError for the character just consumed."""
        position = self.cursor.position - 1
        line, column = self.cursor.location(position)
        return MalformedInputError(message, position=position, line=line, column=column, char=char)

    def intern(self, text: str) -> int:
        """Store an inline literal under the next synthetic id and return the id."""
        self.next_interned_id -= 1
        self.values[self.next_interned_id] = text
        return self.next_interned_id

    def decode_text(self, chars: List[str]) -> str:
        """Turn accumulated byte characters into text with the configured codec."""
        raw = "".join(chars).encode("latin-1")
        try:
            return raw.decode(self.text_encoding, self.encoding_errors)
        except UnicodeDecodeError as e:
            position = self.cursor.position - 1
            line, column = self.cursor.location(position)
            raise MalformedInputError(f"Cannot decode literal as {self.text_encoding}: {e.reason}", position=position, line=line, column=column) from e

    def select_row(self, table_scope: int, table_id: int, row: ScopedId) -> None:
        """Bind a row into a table and make it the current row.

        A zero or absent row scope falls back to the table scope, then to the
        default scope. Ids and scopes are keyed by magnitude.
        """
        row_scope = abs(row.scope or table_scope or self.default_scope)
        table_scope = abs(table_scope or self.default_scope)
        row_id = abs(row.id)
        cells = self.rows.setdefault((row_scope, row_id), {})
        scope_map = self.tables.setdefault(table_scope, {}).setdefault(abs(table_id), {})
        scope_map.setdefault(row_scope, {})[row_id] = cells
        self.current_row = cells

    def snapshot(self) -> MorkDatabase:
        """Freeze the decoded state."""
        return MorkDatabase(columns=self.columns, values=self.values, tables=self.tables)


# =============================================================================
# Decoders
# =============================================================================


def parse_document(ctx: ParseContext) -> None:
    """Decode every top-level term of the buffer.

    Args:
        ctx: Parse context positioned at the start of the buffer.

    Raises:
        MalformedInputError: On an unrecognized top-level character or any
            nested grammar violation.
    """
    cur = ctx.cursor.next_char()
    while cur:
        if not is_whitespace(cur):
            kind = _TERM_KINDS.get(cur)
            if kind is None:
                raise ctx.malformed("Unexpected top-level character", cur)
            if kind is TermKind.DICT:
                parse_dict(ctx)
            elif kind is TermKind.COMMENT:
                parse_comment(ctx)
            elif kind is TermKind.TABLE:
                parse_table(ctx)
            elif kind is TermKind.ROW:
                parse_row(ctx, 0, 0)
            elif kind is TermKind.GROUP:
                logger.debug(f"Skipping group at offset {ctx.cursor.position - 1}")
                skip_meta(ctx, "@")
        cur = ctx.cursor.next_char()


def parse_comment(ctx: ParseContext) -> None:
    """Skip a ``//`` comment; the first ``/`` has been consumed.

    Raises:
        MalformedInputError: If the second character is not ``/``.
    """
    cur = ctx.cursor.next_char()
    if cur != "/":
        raise ctx.malformed("Expected '/' to start a comment", cur)
    while cur and cur not in _LINE_END:
        cur = ctx.cursor.next_char()


def skip_meta(ctx: ParseContext, terminator: str) -> None:
    """Discard everything up to and including ``terminator``.

    Nested blocks are not tracked: the first terminator ends the region.
    """
    cur = ctx.cursor.next_char()
    while cur and cur != terminator:
        cur = ctx.cursor.next_char()


def parse_dict(ctx: ParseContext) -> None:
    """Decode a ``< ... >`` block; the opening ``<`` has been consumed.

    Cells populate the value dictionary unless the column marker switches
    the block to the column dictionary. A block cut short by the end of the
    buffer simply ends.
    """
    cursor = ctx.cursor
    ctx.mode = ParseMode.VALUES
    cur = cursor.next_char()
    while cur and cur != ">":
        if cur == "<":
            if cursor.startswith(COLUMN_DICT_MARKER, cursor.position - 1):
                logger.debug(f"Column dictionary at offset {cursor.position - 1}")
                ctx.mode = ParseMode.COLUMNS
                cursor.skip(len(COLUMN_DICT_MARKER) - 1)
        elif cur == "(":
            parse_cell(ctx)
        elif cur == "/":
            parse_comment(ctx)
        cur = cursor.next_char()


def parse_cell(ctx: ParseContext) -> None:
    """Decode a ``( ... )`` cell; the opening ``(`` has been consumed.

    The text before ``=`` (or before a second ``^``) is the column id, the
    rest is the value. One ``^`` marks the column as an oid, a second marks
    the value as an oid. ``\\`` escapes the next character and swallows a
    line break, ``$XX`` is a hex byte.
    """
    cursor = ctx.cursor
    key: List[str] = []
    value: List[str] = []
    active = key
    carets = 0
    value_oid = False

    cur = cursor.next_char()
    while cur and cur != ")":
        if cur == "^":
            carets += 1
            if carets == 2:
                active = value
                value_oid = True
            elif carets > 2:
                active.append(cur)
        elif cur == "=":
            if active is key:
                active = value
            else:
                active.append(cur)
        elif cur == "\\":
            escaped = cursor.next_char()
            if escaped == "\r":
                if cursor.peek() == "\n":
                    cursor.next_char()
            elif escaped != "\n":
                active.append(escaped)
        elif cur == "$":
            digits = cursor.next_char() + cursor.next_char()
            if len(digits) == 2 and all(c in "0123456789abcdefABCDEF" for c in digits):
                active.append(chr(int(digits, 16)))
            else:
                active.append(cur + digits)
        else:
            active.append(cur)
        cur = cursor.next_char()

    if not value:
        return
    column_id = parse_hex("".join(key))

    if ctx.mode is ParseMode.COLUMNS:
        ctx.columns[column_id] = ctx.decode_text(value)
    elif ctx.mode is ParseMode.VALUES:
        ctx.values[column_id] = ctx.decode_text(value)
    elif value_oid:
        ctx.current_row[column_id] = parse_hex("".join(value))
    else:
        ctx.current_row[column_id] = ctx.intern(ctx.decode_text(value))


def parse_row(ctx: ParseContext, table_id: int, table_scope: int) -> None:
    """Decode a ``[ id:scope (cell)... ]`` row; the ``[`` has been consumed.

    Args:
        ctx: Parse context.
        table_id: Id of the enclosing table, 0 for a top-level row.
        table_scope: Scope of the enclosing table, 0 if none.

    Raises:
        MalformedInputError: On any character other than a cell or a meta
            block inside the row body.
    """
    cursor = ctx.cursor
    ctx.mode = ParseMode.ROWS

    text: List[str] = []
    cur = cursor.next_char()
    while cur and cur not in _ROW_ID_STOP:
        if not is_whitespace(cur):
            text.append(cur)
        cur = cursor.next_char()

    ctx.select_row(table_scope, table_id, parse_scope_id("".join(text)))

    while cur and cur != "]":
        if not is_whitespace(cur):
            if cur == "(":
                parse_cell(ctx)
            elif cur == "[":
                skip_meta(ctx, "]")
            else:
                raise ctx.malformed("Unexpected character in row", cur)
        cur = cursor.next_char()


def parse_table(ctx: ParseContext) -> None:
    """Decode a ``{ id:scope ... }`` table; the ``{`` has been consumed.

    The body holds meta blocks (skipped), rows, ``+``/``-`` markers (ignored)
    and bare ``id:scope`` references binding existing rows into this table.
    A ``}`` that ends a bare reference ends the table without binding it.
    """
    cursor = ctx.cursor

    text: List[str] = []
    cur = cursor.next_char()
    while cur and cur not in _TABLE_ID_STOP:
        if not is_whitespace(cur):
            text.append(cur)
        cur = cursor.next_char()

    table = parse_scope_id("".join(text))
    table_scope = table.scope or 0
    logger.debug(f"Table {table.id:X}:{table_scope:X}")

    while cur and cur != "}":
        if not is_whitespace(cur):
            if cur == "{":
                skip_meta(ctx, "}")
            elif cur == "[":
                parse_row(ctx, table.id, table_scope)
            elif cur in ("+", "-"):
                pass
            else:
                ref: List[str] = []
                while cur and not is_whitespace(cur):
                    ref.append(cur)
                    cur = cursor.next_char()
                    if cur == "}":
                        return
                ctx.select_row(table_scope, table.id, parse_scope_id("".join(ref)))
        cur = cursor.next_char()


# =============================================================================
# Public API
# =============================================================================


class MorkParser:
    """Decoder facade keeping the last result and the last error.

    Each parse() or open() call starts from empty dictionaries and replaces
    the previous result.

    Examples:
        >>> parser = MorkParser(default_scope=0x81)
        >>> parser.parse(b"[5(90=x)]")
        True
        >>> parser.error
        <MorkErrorKind.NO_ERROR: 'no_error'>
        >>> sorted(parser.database.get_tables(0x81)[0][0x81])
        [5]
    """

    def __init__(self, default_scope: Optional[int] = None, text_encoding: Optional[str] = None, encoding_errors: Optional[str] = None):
        """Initialize the parser.

        Args:
            default_scope: Scope substituted for zero/absent scopes; defaults to settings.
            text_encoding: Codec for literal values; defaults to settings.
            encoding_errors: Codec error handler; defaults to settings.
        """
        self.default_scope = default_scope if default_scope is not None else settings.default_scope
        self.text_encoding = text_encoding or settings.text_encoding
        self.encoding_errors = encoding_errors or settings.encoding_errors
        self._database = MorkDatabase.empty()
        self._error = MorkErrorKind.NO_ERROR
        self._error_detail = ""

    @property
    def error(self) -> MorkErrorKind:
        """Classification of the last failure, NO_ERROR after a success."""
        return self._error

    @property
    def error_detail(self) -> str:
        """Message of the last failure, empty after a success."""
        return self._error_detail

    @property
    def database(self) -> MorkDatabase:
        """Result of the last decode; partial if it failed."""
        return self._database

    def parse(self, data: Union[bytes, bytearray, memoryview, str]) -> bool:
        """Decode a post-header Mork buffer.

        Args:
            data: Buffer to decode.

        Returns:
            True on success. On failure, ``error`` and ``error_detail``
            describe the problem and ``database`` holds what was decoded
            before it.
        """
        self._reset()
        ctx = ParseContext(
            cursor=Cursor(data),
            default_scope=self.default_scope,
            text_encoding=self.text_encoding,
            encoding_errors=self.encoding_errors,
        )
        try:
            parse_document(ctx)
        except MorkError as e:
            self._fail(e)
            return False
        finally:
            self._database = ctx.snapshot()
        logger.info(f"Decoded Mork buffer: {len(ctx.columns)} columns, {len(ctx.values)} values, {sum(len(t) for t in ctx.tables.values())} tables, {len(ctx.rows)} rows")
        return True

    def open(self, path: Union[str, Path]) -> bool:
        """Read a Mork file, verify its magic header and decode it.

        Args:
            path: File to open.

        Returns:
            True on success, False with ``error`` set otherwise.
        """
        self._reset()
        try:
            data = read_mork_source(path)
        except MorkError as e:
            self._fail(e)
            return False
        return self.parse(data)

    def get_tables(self, table_scope: int) -> Optional[TableMap]:
        """Return the table-id map of a table scope, or None."""
        return self._database.get_tables(table_scope)

    def get_rows(self, row_scope: int, table: RowScopeMap) -> Optional[RowMap]:
        """Return the rows of a row scope within a table, or None."""
        return self._database.get_rows(row_scope, table)

    def get_value(self, oid: int) -> str:
        """Return the literal for a value id, or an empty string."""
        return self._database.get_value(oid)

    def get_column(self, oid: int) -> str:
        """Return the name of a column id, or an empty string."""
        return self._database.get_column(oid)

    def _reset(self) -> None:
        self._database = MorkDatabase.empty()
        self._error = MorkErrorKind.NO_ERROR
        self._error_detail = ""

    def _fail(self, error: MorkError) -> None:
        self._error = error.kind
        self._error_detail = str(error)
        logger.warning(f"Mork decode failed ({error.kind.value}): {error}")


def decode(data: Union[bytes, bytearray, memoryview, str], default_scope: Optional[int] = None) -> MorkDatabase:
    """Decode a post-header Mork buffer, raising on failure.

    Args:
        data: Buffer to decode.
        default_scope: Scope substituted for zero/absent scopes; defaults to settings.

    Returns:
        The decoded database.

    Raises:
        MalformedInputError: If the buffer violates the grammar.

    Examples:
        >>> decode(b"<(90=Alice)>").get_value(0x90)
        'Alice'
        >>> try:
        ...     decode(b"%")
        ... except MalformedInputError as e:
        ...     (e.line, e.column, e.char)
        (1, 1, '%')
    """
    ctx = ParseContext(
        cursor=Cursor(data),
        default_scope=default_scope if default_scope is not None else settings.default_scope,
        text_encoding=settings.text_encoding,
        encoding_errors=settings.encoding_errors,
    )
    parse_document(ctx)
    return ctx.snapshot()


def open_mork(path: Union[str, Path], default_scope: Optional[int] = None) -> MorkDatabase:
    """Read, verify and decode a Mork file, raising on failure.

    Args:
        path: File to open.
        default_scope: Scope substituted for zero/absent scopes; defaults to settings.

    Returns:
        The decoded database.

    Raises:
        FailedToOpenError: If the file cannot be read.
        UnsupportedVersionError: If the magic header is missing.
        MalformedInputError: If the content violates the grammar.
    """
    return decode(read_mork_source(path), default_scope=default_scope)
