# -*- coding: utf-8 -*-
"""Unit tests for the read-only query surface."""

# Third-Party
import pytest

# First-Party
from morkreader.database import MorkDatabase, RowEntry


@pytest.fixture
def db():
    shared = {0x83: 0x90}
    return MorkDatabase(
        columns={0x83: "FirstName", 0x84: "LastName"},
        values={0x90: "Alice", 0x91: "Smith"},
        tables={
            0x80: {
                1: {0x80: {1: shared, 2: {0x84: 0x91}}},
                0: {0x80: {1: shared}},
            },
            0x81: {5: {0x81: {9: {}}}},
        },
    )


class TestLookups:
    """Test scope, row and dictionary lookups."""

    def test_get_tables(self, db):
        assert sorted(db.get_tables(0x80)) == [0, 1]
        assert db.get_tables(0x82) is None

    def test_get_rows(self, db):
        table = db.get_tables(0x80)[1]
        assert sorted(db.get_rows(0x80, table)) == [1, 2]
        assert db.get_rows(0x81, table) is None

    def test_get_value_and_column(self, db):
        assert db.get_value(0x90) == "Alice"
        assert db.get_column(0x84) == "LastName"

    def test_unknown_ids_return_empty_string(self, db):
        assert db.get_value(0x7FFFFFFE) == ""
        assert db.get_column(-1) == ""

    def test_table_scopes_sorted(self, db):
        assert db.table_scopes() == [0x80, 0x81]


class TestReadOnly:
    """Test that the snapshot cannot be mutated through its views."""

    def test_dictionaries_are_read_only(self, db):
        with pytest.raises(TypeError):
            db.values[1] = "x"
        with pytest.raises(TypeError):
            db.columns[1] = "x"

    def test_nested_maps_are_read_only(self, db):
        table = db.get_tables(0x80)[1]
        rows = db.get_rows(0x80, table)
        with pytest.raises(TypeError):
            db.tables[0x99] = {}
        with pytest.raises(TypeError):
            table[0x99] = {}
        with pytest.raises(TypeError):
            rows[1][0x99] = 1

    def test_shared_row_uses_one_view(self, db):
        first = db.get_tables(0x80)[1][0x80][1]
        second = db.get_tables(0x80)[0][0x80][1]
        assert first is second

    def test_row_count_counts_shared_rows_once(self, db):
        assert db.row_count == 3

    def test_snapshot_is_detached_from_source_dicts(self):
        values = {1: "a"}
        db = MorkDatabase(values=values)
        values[2] = "b"
        assert db.get_value(2) == ""

    def test_cells_are_detached_from_source_rows(self):
        cells = {0x80: 1}
        db = MorkDatabase(tables={0x80: {1: {0x80: {1: cells}}, 2: {0x80: {1: cells}}}})
        cells[0x81] = 2
        first = db.get_tables(0x80)[1][0x80][1]
        assert dict(first) == {0x80: 1}
        assert first is db.get_tables(0x80)[2][0x80][1]


class TestConvenience:
    """Test row iteration and cell resolution."""

    def test_iter_rows_order(self, db):
        coords = [entry[:4] for entry in db.iter_rows()]
        assert coords == [
            (0x80, 0, 0x80, 1),
            (0x80, 1, 0x80, 1),
            (0x80, 1, 0x80, 2),
            (0x81, 5, 0x81, 9),
        ]

    def test_iter_rows_entries(self, db):
        entry = next(db.iter_rows())
        assert isinstance(entry, RowEntry)
        assert dict(entry.cells) == {0x83: 0x90}

    def test_resolve_cells(self, db):
        cells = db.get_tables(0x80)[1][0x80][2]
        assert db.resolve_cells(cells) == {"LastName": "Smith"}

    def test_resolve_unknown_column_and_value(self, db):
        assert db.resolve_cells({0xAB: 0x1234}) == {"AB": ""}

    def test_empty(self):
        db = MorkDatabase.empty()
        assert db.table_scopes() == []
        assert list(db.iter_rows()) == []
        assert db.row_count == 0

    def test_repr(self, db):
        assert repr(db) == "MorkDatabase(columns=2, values=2, table_scopes=2, rows=3)"
