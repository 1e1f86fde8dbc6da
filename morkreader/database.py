# -*- coding: utf-8 -*-
"""Location: ./morkreader/database.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Read-only view of a decoded Mork document.

The decoder hands its dictionaries and its four-level table structure
(table scope -> table id -> row scope -> row id -> cells) to a MorkDatabase.
Every mapping exposed here is a ``MappingProxyType``; a row shared by several
tables is exposed through the same proxy object in each of them.

Examples:
    >>> db = MorkDatabase(columns={0x80: "Name"}, values={1: "Alice"}, tables={0x80: {1: {0x80: {1: {0x80: 1}}}}})
    >>> table = db.get_tables(0x80)[1]
    >>> rows = db.get_rows(0x80, table)
    >>> db.resolve_cells(rows[1])
    {'Name': 'Alice'}
    >>> db.get_tables(0x99) is None
    True
    >>> db.get_value(42)
    ''
"""

# Standard
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional

Cells = Mapping[int, int]
RowMap = Mapping[int, Cells]
RowScopeMap = Mapping[int, RowMap]
TableMap = Mapping[int, RowScopeMap]

_EMPTY = ""


class RowEntry(NamedTuple):
    """One row as reached through a table, with its full coordinates."""

    table_scope: int
    table_id: int
    row_scope: int
    row_id: int
    cells: Cells


class MorkDatabase:
    """Immutable snapshot of one decode pass."""

    def __init__(
        self,
        columns: Optional[Dict[int, str]] = None,
        values: Optional[Dict[int, str]] = None,
        tables: Optional[Dict[int, Dict[int, Dict[int, Dict[int, Dict[int, int]]]]]] = None,
    ):
        """Freeze decoded state.

        Args:
            columns: Column id -> column name.
            values: Value id -> literal text.
            tables: Table scope -> table id -> row scope -> row id -> cells.
        """
        self._columns = MappingProxyType(dict(columns or {}))
        self._values = MappingProxyType(dict(values or {}))

        # One frozen copy per underlying cell dict keeps shared rows shared.
        cell_views: Dict[int, Cells] = {}

        def _view(cells: Dict[int, int]) -> Cells:
            view = cell_views.get(id(cells))
            if view is None:
                view = cell_views[id(cells)] = MappingProxyType(dict(cells))
            return view

        frozen: Dict[int, TableMap] = {}
        for table_scope, table_map in (tables or {}).items():
            frozen[table_scope] = MappingProxyType(
                {
                    table_id: MappingProxyType(
                        {row_scope: MappingProxyType({row_id: _view(cells) for row_id, cells in row_map.items()}) for row_scope, row_map in scope_map.items()}
                    )
                    for table_id, scope_map in table_map.items()
                }
            )
        self._tables = MappingProxyType(frozen)
        self._row_count = len(cell_views)

    @classmethod
    def empty(cls) -> "MorkDatabase":
        """Return a database with no entries.

        Examples:
            >>> MorkDatabase.empty().table_scopes()
            []
        """
        return cls()

    @property
    def columns(self) -> Mapping[int, str]:
        """Column id -> column name."""
        return self._columns

    @property
    def values(self) -> Mapping[int, str]:
        """Value id -> literal text, including interned literals."""
        return self._values

    @property
    def tables(self) -> Mapping[int, TableMap]:
        """The full table scope -> table id -> row scope -> row id -> cells structure."""
        return self._tables

    @property
    def row_count(self) -> int:
        """Number of distinct rows, counting a row shared by several tables once."""
        return self._row_count

    def get_tables(self, table_scope: int) -> Optional[TableMap]:
        """Return the table-id map of a table scope.

        Args:
            table_scope: Table scope to look up.

        Returns:
            Mapping of table id -> row-scope map, or None if the scope is unknown.
        """
        return self._tables.get(table_scope)

    def get_rows(self, row_scope: int, table: RowScopeMap) -> Optional[RowMap]:
        """Return the rows of one row scope within a table.

        Args:
            row_scope: Row scope to look up.
            table: A row-scope map, as found in the result of get_tables().

        Returns:
            Mapping of row id -> cells, or None if the table has no such scope.
        """
        return table.get(row_scope)

    def get_value(self, oid: int) -> str:
        """Return the literal for a value id, or an empty string if unknown.

        Examples:
            >>> MorkDatabase(values={7: "x"}).get_value(7)
            'x'
        """
        return self._values.get(oid, _EMPTY)

    def get_column(self, oid: int) -> str:
        """Return the name of a column id, or an empty string if unknown."""
        return self._columns.get(oid, _EMPTY)

    def table_scopes(self) -> List[int]:
        """Return the table scopes present, ascending."""
        return sorted(self._tables)

    def iter_rows(self) -> Iterator[RowEntry]:
        """Yield every row reachable through a table, in ascending key order.

        A row bound into several tables is yielded once per table.
        """
        for table_scope in sorted(self._tables):
            table_map = self._tables[table_scope]
            for table_id in sorted(table_map):
                scope_map = table_map[table_id]
                for row_scope in sorted(scope_map):
                    row_map = scope_map[row_scope]
                    for row_id in sorted(row_map):
                        yield RowEntry(table_scope, table_id, row_scope, row_id, row_map[row_id])

    def resolve_cells(self, cells: Cells) -> Dict[str, str]:
        """Translate a row's cells to column name -> literal text.

        Columns missing from the column dictionary are named by their
        upper-case hex id.

        Args:
            cells: Column id -> value id mapping of one row.

        Returns:
            Dict of column name -> literal value.

        Examples:
            >>> MorkDatabase(values={1: "v"}).resolve_cells({0x8A: 1})
            {'8A': 'v'}
        """
        resolved: Dict[str, str] = {}
        for column_id, value_id in cells.items():
            name = self._columns.get(column_id) or f"{column_id:X}"
            resolved[name] = self.get_value(value_id)
        return resolved

    def __repr__(self) -> str:
        return f"MorkDatabase(columns={len(self._columns)}, values={len(self._values)}, table_scopes={len(self._tables)}, rows={self._row_count})"
