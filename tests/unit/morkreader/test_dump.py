# -*- coding: utf-8 -*-
"""Unit tests for the diagnostic dumps."""

# Third-Party
import orjson
from pydantic import ValidationError
import pytest

# First-Party
from morkreader.dump import build_dump, dump_json, dump_text
from morkreader.parser import decode, INTERNED_ID_CEILING
from morkreader.schemas import CellDump, MorkDump


class TestBuildDump:
    """Test conversion to the dump model."""

    def test_dictionaries_use_hex_keys(self, address_book):
        dump = build_dump(decode(address_book))
        assert dump.columns["83"] == "FirstName"
        assert dump.values["90"] == "Alice"
        assert dump.values[f"{INTERNED_ID_CEILING - 1:X}"] == "Bob"

    def test_tables_in_order(self, address_book):
        dump = build_dump(decode(address_book))
        assert [(t.scope, t.id) for t in dump.tables] == [(0x80, 0), (0x80, 1)]
        assert [r.id for r in dump.tables[1].rows] == [1, 2]

    def test_cells_are_resolved(self, address_book):
        dump = build_dump(decode(address_book))
        first = dump.tables[1].rows[0].cells[0]
        assert first == CellDump(column_id=0x83, column="FirstName", value_id=0x90, value="Alice")

    def test_dangling_reference(self):
        dump = build_dump(decode(b"[1(^83^99)]"))
        cell = dump.tables[0].rows[0].cells[0]
        assert cell.column == ""
        assert cell.value == ""
        assert cell.value_id == 0x99

    def test_models_are_frozen(self, address_book):
        dump = build_dump(decode(address_book))
        with pytest.raises(ValidationError):
            dump.columns = {}

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            MorkDump(columns={}, values={}, tables=[], extra=1)


class TestDumpJson:
    """Test JSON serialization."""

    def test_round_trips_through_model(self, address_book):
        db = decode(address_book)
        payload = orjson.loads(dump_json(db))
        assert MorkDump.model_validate(payload) == build_dump(db)

    def test_compact(self):
        assert dump_json(decode(b"<(90=x)>"), indent=False) == b'{"columns":{},"values":{"90":"x"},"tables":[]}'


class TestDumpText:
    """Test the text listing."""

    def test_sections(self, address_book):
        text = dump_text(decode(address_book))
        assert text.startswith("Column Dict:\n")
        assert "\nValues Dict:\n" in text
        assert "\nData:\n" in text
        assert "83 : FirstName\n" in text
        assert " Scope:80\n" in text
        assert "\t Table: 1\n" in text
        assert "\t\t RowScope:80\n" in text
        assert "\t\t\t Row Id: 2\n" in text
        assert "\t\t\t\t\t83 : 90  =>  FirstName : Alice\n" in text

    def test_scope_header_once_per_scope(self, address_book):
        text = dump_text(decode(address_book))
        assert text.count(" Scope:80\n") == 1

    def test_dangling_value_keeps_ids(self):
        text = dump_text(decode(b"[1(^83^99)]"))
        assert "\t\t\t\t\t83 : 99  =>   : \n" in text

    def test_empty_database(self):
        text = dump_text(decode(b""))
        assert text.endswith("Data:\n" + "=" * 45 + "\n")
