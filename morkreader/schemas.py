# -*- coding: utf-8 -*-
"""Location: ./morkreader/schemas.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Mork Dump Schema Definitions.
Pydantic models describing the JSON form of a decoded Mork database, as
produced by ``morkreader dump --format json``. Ids are kept as integers and
dictionary keys are upper-case hex strings, matching the text dump.
"""

# Standard
from typing import Dict, List

# Third-Party
from pydantic import BaseModel, ConfigDict, Field


class DumpModel(BaseModel):
    """Base for dump models: immutable, no unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class CellDump(DumpModel):
    """One cell with both ids and their resolved text.

    Examples:
        >>> CellDump(column_id=0x83, column="FirstName", value_id=0x90, value="Alice").column
        'FirstName'
    """

    column_id: int
    column: str = Field(description="Column name, empty if the id is not in the column dictionary")
    value_id: int
    value: str = Field(description="Literal text, empty if the id is not in the value dictionary")


class RowDump(DumpModel):
    """A row and its cells."""

    scope: int
    id: int
    cells: List[CellDump] = Field(default_factory=list)


class TableDump(DumpModel):
    """A table and the rows bound into it, across all row scopes."""

    scope: int
    id: int
    rows: List[RowDump] = Field(default_factory=list)


class MorkDump(DumpModel):
    """Complete dump of a decoded database."""

    columns: Dict[str, str] = Field(default_factory=dict, description="Hex column id -> column name")
    values: Dict[str, str] = Field(default_factory=dict, description="Hex value id -> literal text")
    tables: List[TableDump] = Field(default_factory=list)
