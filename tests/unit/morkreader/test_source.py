# -*- coding: utf-8 -*-
"""Unit tests for loading Mork files."""

# Third-Party
import pytest

# First-Party
from morkreader.errors import FailedToOpenError, MorkErrorKind, UnsupportedVersionError
from morkreader.source import read_mork_source, split_magic_header

MAGIC = b'// <!-- <mdb:mork:z v="1.4"/> -->'


class TestSplitMagicHeader:
    """Test magic header verification."""

    def test_strips_first_line(self):
        assert split_magic_header(MAGIC + b"\n<(90=x)>\n") == b"<(90=x)>\n"

    def test_crlf_header(self):
        assert split_magic_header(MAGIC + b"\r\n<(90=x)>") == b"<(90=x)>"

    def test_header_only(self):
        assert split_magic_header(MAGIC) == b""

    def test_missing_header(self):
        with pytest.raises(UnsupportedVersionError) as exc:
            split_magic_header(b"<(90=x)>\n")
        assert exc.value.kind is MorkErrorKind.UNSUPPORTED_VERSION

    def test_header_on_second_line_is_rejected(self):
        with pytest.raises(UnsupportedVersionError):
            split_magic_header(b"\n" + MAGIC + b"\n")

    def test_custom_header(self):
        assert split_magic_header(b"// mork 2.0\nrest", magic_header="mork 2.0") == b"rest"

    def test_header_from_settings(self, monkeypatch):
        monkeypatch.setenv("MORK_MAGIC_HEADER", "custom-magic")
        assert split_magic_header(b"custom-magic\nrest") == b"rest"


class TestReadMorkSource:
    """Test reading files from disk."""

    def test_reads_post_header_bytes(self, mork_file, address_book):
        assert read_mork_source(mork_file) == address_book

    def test_accepts_str_path(self, mork_file, address_book):
        assert read_mork_source(str(mork_file)) == address_book

    def test_missing_file(self, tmp_path):
        with pytest.raises(FailedToOpenError) as exc:
            read_mork_source(tmp_path / "nope.mab")
        assert exc.value.kind is MorkErrorKind.FAILED_TO_OPEN

    def test_directory_is_not_readable(self, tmp_path):
        with pytest.raises(FailedToOpenError):
            read_mork_source(tmp_path)
