# -*- coding: utf-8 -*-
"""Location: ./morkreader/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Mork Reader Configuration.
This module defines configuration settings for the Mork reader using Pydantic.
It loads configuration from environment variables with sensible defaults.

Environment variables:
- MORK_DEFAULT_SCOPE: Scope substituted for zero/absent scopes (default: 0x80)
- MORK_TEXT_ENCODING: Codec used for literal values (default: "utf-8")
- MORK_ENCODING_ERRORS: Codec error handler (default: "replace")
- MORK_MAGIC_HEADER: Substring required on the first line of a file (default: '<mdb:mork:z v="1.4"/>')
- MORK_LOG_LEVEL: Logging level used by the CLI (default: "INFO")

Examples:
    >>> from morkreader.config import Settings
    >>> s = Settings(default_scope="0x81")
    >>> s.default_scope
    129
    >>> Settings().default_scope
    128
    >>> try:
    ...     Settings(log_level="chatty")
    ... except ValueError:
    ...     print('error')
    error
"""

# Standard
import codecs
from functools import lru_cache
import logging
import sys
from typing import Any, Literal

# Third-Party
import orjson
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """
    Mork reader configuration settings.

    Examples:
        >>> s = Settings()
        >>> s.text_encoding
        'utf-8'
        >>> s.encoding_errors
        'replace'
        >>> s.magic_header
        '<mdb:mork:z v="1.4"/>'
        >>> Settings(log_level="debug").log_level
        'DEBUG'
    """

    default_scope: int = Field(default=0x80, ge=1, description="Scope substituted for a zero or absent table/row scope")
    text_encoding: str = Field(default="utf-8", description="Codec used to decode literal values")
    encoding_errors: Literal["strict", "replace", "ignore", "surrogateescape", "backslashreplace"] = Field(
        default="replace", description="Codec error handler used when decoding literal values"
    )
    magic_header: str = Field(default='<mdb:mork:z v="1.4"/>', description="Substring the first line of a Mork file must contain")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level for the command line tool")
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(env_prefix="MORK_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    @field_validator("default_scope", mode="before")
    @classmethod
    def parse_scope_literal(cls, v: Any) -> Any:
        """Accept integer literals written as strings, including hex.

        Args:
            v: Raw value from the environment or caller.

        Returns:
            The integer value for strings, anything else unchanged.

        Raises:
            ValueError: If a string is not an integer literal.

        Examples:
            >>> Settings.parse_scope_literal("0x80")
            128
            >>> Settings.parse_scope_literal(5)
            5
        """
        if isinstance(v, str):
            try:
                return int(v.strip(), 0)
            except ValueError as e:
                raise ValueError(f"default_scope must be an integer literal, got {v!r}") from e
        return v

    @field_validator("text_encoding")
    @classmethod
    def must_be_known_codec(cls, v: str) -> str:
        """Validate the literal codec name.

        Args:
            v: Codec name.

        Returns:
            The codec name unchanged.

        Raises:
            ValueError: If Python has no codec with that name.
        """
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {v}") from e
        return v

    @field_validator("log_level")
    @classmethod
    def must_be_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name.

        Args:
            v: Level name in any case.

        Returns:
            Upper-cased level name.

        Raises:
            ValueError: If the name is not a standard logging level.
        """
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def log_summary(self) -> None:
        """Log a summary of the active settings."""
        logger.info(f"Mork reader settings summary: {self.model_dump()}")


@lru_cache()
def get_settings(**kwargs: Any) -> Settings:
    """Get cached settings instance.

    Args:
        **kwargs: Keyword arguments to pass to the Settings setup.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> settings = get_settings()
        >>> settings is get_settings()
        True
    """
    return Settings(**kwargs)


def generate_settings_schema() -> dict[str, Any]:
    """Return the JSON Schema describing the Settings model.

    Returns:
        dict: A dictionary representing the JSON Schema of the Settings model.
    """
    return Settings.model_json_schema(mode="validation")


class LazySettingsWrapper:
    """Lazily initialize settings singleton on getattr"""

    def __getattr__(self, key: str) -> Any:
        """Get the real settings object and forward to it

        Args:
            key: The key to fetch from settings

        Returns:
            Any: The value of the attribute on the settings
        """
        return getattr(get_settings(), key)


settings = LazySettingsWrapper()


if __name__ == "__main__":
    if "--schema" in sys.argv:
        schema = generate_settings_schema()
        print(orjson.dumps(schema, option=orjson.OPT_INDENT_2).decode())
        sys.exit(0)
    settings.log_summary()
