# -*- coding: utf-8 -*-
"""Location: ./morkreader/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Mork Reader Errors.
This module defines the error classification reported by the decoder and the
exception hierarchy raised by the convenience API.

Examples:
    >>> err = MalformedInputError("unexpected character", position=0, line=1, column=1, char="%")
    >>> err.kind
    <MorkErrorKind.MALFORMED_INPUT: 'malformed_input'>
    >>> isinstance(err, MorkError)
    True
"""

# Standard
from enum import Enum
from typing import Optional


class MorkErrorKind(str, Enum):
    """Classification of the last decode failure.

    Attributes:
        NO_ERROR: The last operation succeeded.
        FAILED_TO_OPEN: The source file is missing or unreadable.
        UNSUPPORTED_VERSION: The first line does not carry the Mork magic header.
        MALFORMED_INPUT: A character appeared where the grammar disallows it.
    """

    NO_ERROR = "no_error"
    FAILED_TO_OPEN = "failed_to_open"
    UNSUPPORTED_VERSION = "unsupported_version"
    MALFORMED_INPUT = "malformed_input"


class MorkError(Exception):
    """Base class for Mork reader errors.

    Examples:
        >>> try:
        ...     raise MorkError("boom")
        ... except MorkError as e:
        ...     (str(e), e.kind)
        ('boom', <MorkErrorKind.MALFORMED_INPUT: 'malformed_input'>)
    """

    kind: MorkErrorKind = MorkErrorKind.MALFORMED_INPUT


class MalformedInputError(MorkError):
    """Raised when the decoder meets a character the grammar does not allow."""

    kind = MorkErrorKind.MALFORMED_INPUT

    def __init__(self, message: str, position: int = -1, line: int = 0, column: int = 0, char: Optional[str] = None):
        """Initialize a MalformedInputError.

        Args:
            message: Human readable description.
            position: Zero-based offset of the offending character, -1 if unknown.
            line: 1-based line of the offending character, 0 if unknown.
            column: 1-based column of the offending character, 0 if unknown.
            char: The offending character, if any.

        Examples:
            >>> str(MalformedInputError("bad", position=4, line=2, column=3, char="%"))
            "bad at line 2, column 3 (character '%')"
            >>> str(MalformedInputError("bad"))
            'bad'
        """
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        self.char = char
        detail = message
        if line:
            detail = f"{detail} at line {line}, column {column}"
        if char:
            detail = f"{detail} (character {char!r})"
        super().__init__(detail)


class FailedToOpenError(MorkError):
    """Raised when a Mork file cannot be opened or read."""

    kind = MorkErrorKind.FAILED_TO_OPEN


class UnsupportedVersionError(MorkError):
    """Raised when a Mork file does not start with the expected magic header."""

    kind = MorkErrorKind.UNSUPPORTED_VERSION
