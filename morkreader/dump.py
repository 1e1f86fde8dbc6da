# -*- coding: utf-8 -*-
"""Location: ./morkreader/dump.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Diagnostic dumps of a decoded Mork database.

Examples:
    >>> from morkreader.parser import decode
    >>> db = decode(b"< <(a=c)> (83=FirstName)> {1:^80 [1(^83=Alice)]}")
    >>> print(dump_text(db).splitlines()[-1].strip())
    83 : 7FFFFFFE  =>  FirstName : Alice
    >>> build_dump(db).tables[0].rows[0].cells[0].value
    'Alice'
"""

# Standard
from typing import List

# Third-Party
import orjson

# First-Party
from morkreader.database import MorkDatabase
from morkreader.schemas import CellDump, MorkDump, RowDump, TableDump

_RULE = "=" * 45


def build_dump(db: MorkDatabase) -> MorkDump:
    """Convert a database to its dump model.

    Args:
        db: Decoded database.

    Returns:
        MorkDump with dictionaries and tables in ascending id order.
    """
    tables: List[TableDump] = []
    for table_scope in db.table_scopes():
        table_map = db.get_tables(table_scope)
        for table_id in sorted(table_map):
            rows = []
            scope_map = table_map[table_id]
            for row_scope in sorted(scope_map):
                row_map = scope_map[row_scope]
                for row_id in sorted(row_map):
                    cells = [
                        CellDump(column_id=column_id, column=db.get_column(column_id), value_id=value_id, value=db.get_value(value_id))
                        for column_id, value_id in sorted(row_map[row_id].items())
                    ]
                    rows.append(RowDump(scope=row_scope, id=row_id, cells=cells))
            tables.append(TableDump(scope=table_scope, id=table_id, rows=rows))

    return MorkDump(
        columns={f"{oid:X}": name for oid, name in sorted(db.columns.items())},
        values={f"{oid:X}": text for oid, text in sorted(db.values.items())},
        tables=tables,
    )


def dump_json(db: MorkDatabase, indent: bool = True) -> bytes:
    """Serialize a database to JSON.

    Args:
        db: Decoded database.
        indent: Pretty-print with two-space indentation.

    Returns:
        UTF-8 encoded JSON document.

    Examples:
        >>> dump_json(MorkDatabase.empty(), indent=False)
        b'{"columns":{},"values":{},"tables":[]}'
    """
    option = orjson.OPT_INDENT_2 if indent else None
    return orjson.dumps(build_dump(db).model_dump(), option=option)


def dump_text(db: MorkDatabase) -> str:
    """Render a database as an indented, human readable listing.

    Args:
        db: Decoded database.

    Returns:
        Text with the column dictionary, the value dictionary and every
        table, row and cell. Ids are upper-case hex.
    """
    model = build_dump(db)
    lines = ["Column Dict:", _RULE, ""]
    lines.extend(f"{oid} : {name}" for oid, name in model.columns.items())
    lines.extend(["", "Values Dict:", _RULE, ""])
    lines.extend(f"{oid} : {text}" for oid, text in model.values.items())
    lines.extend(["", "Data:", _RULE])

    current_scope = None
    for table in model.tables:
        if table.scope != current_scope:
            current_scope = table.scope
            lines.extend(["", f" Scope:{table.scope:X}"])
        lines.append(f"\t Table: {table.id:X}")
        row_scope = None
        for row in table.rows:
            if row.scope != row_scope:
                row_scope = row.scope
                lines.append(f"\t\t RowScope:{row.scope:X}")
            lines.append(f"\t\t\t Row Id: {row.id:X}")
            lines.append("\t\t\t\t Cells:")
            for cell in row.cells:
                lines.append(f"\t\t\t\t\t{cell.column_id:X} : {cell.value_id:X}  =>  {cell.column} : {cell.value}")
    return "\n".join(lines) + "\n"
