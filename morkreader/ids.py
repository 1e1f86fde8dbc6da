# -*- coding: utf-8 -*-
"""Location: ./morkreader/ids.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Hexadecimal object ids and ``id:scope`` identifiers.

Examples:
    >>> parse_scope_id("1A:^80")
    ScopedId(id=26, scope=128)
    >>> parse_scope_id("1A")
    ScopedId(id=26, scope=None)
"""

# Standard
import re
from typing import NamedTuple, Optional

_HEX_RE = re.compile(r"^[+-]?[0-9A-Fa-f]+$")


class ScopedId(NamedTuple):
    """An object id with an optional scope; ``scope`` is None when not written."""

    id: int
    scope: Optional[int]


def parse_hex(text: str) -> int:
    """Parse a signed hexadecimal integer, yielding 0 for anything unparsable.

    Args:
        text: Hex digits with an optional leading sign.

    Returns:
        The integer value, or 0 if ``text`` is empty or not hexadecimal.

    Examples:
        >>> parse_hex("80")
        128
        >>> parse_hex("-1f")
        -31
        >>> parse_hex("")
        0
        >>> parse_hex("xyz")
        0
    """
    text = text.strip()
    if not _HEX_RE.match(text):
        return 0
    return int(text, 16)


def parse_scope_id(text: str) -> ScopedId:
    """Split ``id:scope`` text into its numeric parts.

    A leading ``^`` on the scope is dropped before parsing. Text without a
    colon is taken as a bare id and the scope is left unset.

    Args:
        text: Identifier text such as ``"1"``, ``"1:80"`` or ``"-1:^80"``.

    Returns:
        ScopedId with the parsed id and scope.

    Examples:
        >>> parse_scope_id("-2:^80")
        ScopedId(id=-2, scope=128)
        >>> parse_scope_id("2:80")
        ScopedId(id=2, scope=128)
        >>> parse_scope_id("2:")
        ScopedId(id=2, scope=0)
    """
    id_text, sep, scope_text = text.partition(":")
    if not sep:
        return ScopedId(parse_hex(text), None)
    if len(scope_text) > 1 and scope_text[0] == "^":
        scope_text = scope_text[1:]
    return ScopedId(parse_hex(id_text), parse_hex(scope_text))
