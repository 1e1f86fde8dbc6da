# -*- coding: utf-8 -*-
"""Unit tests for settings."""

# Third-Party
from pydantic import ValidationError
import pytest

# First-Party
from morkreader.config import get_settings, Settings, settings


class TestSettings:
    """Test defaults, environment loading and validation."""

    def test_defaults(self):
        s = Settings()
        assert s.default_scope == 0x80
        assert s.text_encoding == "utf-8"
        assert s.encoding_errors == "replace"
        assert s.log_level == "INFO"

    @pytest.mark.parametrize("raw,expected", [("0x81", 0x81), ("129", 129), (" 0x90 ", 0x90), (7, 7)])
    def test_default_scope_literals(self, raw, expected):
        assert Settings(default_scope=raw).default_scope == expected

    @pytest.mark.parametrize("raw", ["0", "-1", "eighty", 0])
    def test_invalid_default_scope(self, raw):
        with pytest.raises(ValidationError):
            Settings(default_scope=raw)

    def test_unknown_encoding(self):
        with pytest.raises(ValidationError):
            Settings(text_encoding="no-such-codec")

    def test_unknown_error_handler(self):
        with pytest.raises(ValidationError):
            Settings(encoding_errors="explode")

    def test_log_level_normalized(self):
        assert Settings(log_level=" warning ").log_level == "WARNING"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("MORK_DEFAULT_SCOPE", "0x82")
        monkeypatch.setenv("MORK_TEXT_ENCODING", "latin-1")
        s = Settings()
        assert s.default_scope == 0x82
        assert s.text_encoding == "latin-1"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_lazy_wrapper_forwards(self, monkeypatch):
        monkeypatch.setenv("MORK_DEFAULT_SCOPE", "0x83")
        assert settings.default_scope == 0x83
