# -*- coding: utf-8 -*-
"""Location: ./morkreader/scanner.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Single-character cursor over a Mork buffer.

The buffer is held as a latin-1 string so that every character maps to exactly
one source byte. Literal values are re-encoded to bytes when a cell completes
and decoded with the configured text codec there.

Examples:
    >>> cur = Cursor(b"<(80=a)>")
    >>> cur.next_char(), cur.next_char(), cur.peek()
    ('<', '(', '8')
    >>> cur.startswith("(80", 1)
    True
    >>> is_whitespace("\\f"), is_whitespace("x")
    (True, False)
"""

# Standard
from typing import Tuple, Union

# End-of-buffer sentinel returned by Cursor.next_char()
END = ""

_WHITESPACE = frozenset(" \t\r\n\f")


def is_whitespace(c: str) -> bool:
    """Return True for space, tab, carriage return, line feed and form feed.

    Args:
        c: A single character or the END sentinel.

    Returns:
        True if ``c`` is Mork whitespace.

    Examples:
        >>> is_whitespace(" ")
        True
        >>> is_whitespace(END)
        False
    """
    return c in _WHITESPACE


class Cursor:
    """Forward-only lookahead over an in-memory buffer."""

    def __init__(self, data: Union[bytes, bytearray, memoryview, str]):
        """Wrap a buffer.

        Args:
            data: Raw Mork bytes. A ``str`` is encoded as UTF-8 first.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._text = bytes(data).decode("latin-1")
        self._pos = 0

    @property
    def position(self) -> int:
        """Offset of the next character to be returned."""
        return self._pos

    def next_char(self) -> str:
        """Return the next character and advance, or END once exhausted.

        Returns:
            The next character, or END.

        Examples:
            >>> cur = Cursor(b"a")
            >>> cur.next_char(), cur.next_char(), cur.next_char()
            ('a', '', '')
        """
        if self._pos >= len(self._text):
            return END
        c = self._text[self._pos]
        self._pos += 1
        return c

    def peek(self) -> str:
        """Return the next character without consuming it, or END."""
        if self._pos >= len(self._text):
            return END
        return self._text[self._pos]

    def startswith(self, prefix: str, start: int) -> bool:
        """Return True if the buffer holds ``prefix`` at offset ``start``."""
        return self._text.startswith(prefix, start)

    def skip(self, count: int) -> None:
        """Advance by ``count`` characters, never past the end."""
        self._pos = min(self._pos + count, len(self._text))

    def location(self, position: int) -> Tuple[int, int]:
        """Translate an offset to a 1-based (line, column) pair.

        Args:
            position: Zero-based offset into the buffer.

        Returns:
            Tuple of (line, column).

        Examples:
            >>> Cursor(b"ab\\ncd").location(4)
            (2, 2)
        """
        line = self._text.count("\n", 0, position) + 1
        column = position - (self._text.rfind("\n", 0, position) + 1) + 1
        return line, column
