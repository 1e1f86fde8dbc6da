# -*- coding: utf-8 -*-
"""Location: ./morkreader/source.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Loading Mork files from disk.

A Mork file starts with a magic header line such as
``// <!-- <mdb:mork:z v="1.4"/> -->``. This module checks that line and
returns the remaining bytes, which is the buffer the decoder consumes.
"""

# Standard
import logging
from pathlib import Path
from typing import Optional, Union

# First-Party
from morkreader.config import settings
from morkreader.errors import FailedToOpenError, UnsupportedVersionError

logger = logging.getLogger(__name__)


def split_magic_header(raw: bytes, magic_header: Optional[str] = None) -> bytes:
    """Verify the first line of a Mork document and strip it.

    Args:
        raw: Complete file content.
        magic_header: Required substring of the first line; defaults to settings.

    Returns:
        Everything after the first line.

    Raises:
        UnsupportedVersionError: If the first line lacks the magic header.

    Examples:
        >>> split_magic_header(b'// <!-- <mdb:mork:z v="1.4"/> -->\\n<(80=a)>')
        b'<(80=a)>'
        >>> try:
        ...     split_magic_header(b"// something else\\n")
        ... except UnsupportedVersionError as e:
        ...     e.kind.value
        'unsupported_version'
    """
    magic = (magic_header if magic_header is not None else settings.magic_header).encode("utf-8")
    first_line, newline, rest = raw.partition(b"\n")
    if magic not in first_line:
        raise UnsupportedVersionError(f"Missing Mork magic header {magic.decode('utf-8')!r}")
    return rest if newline else b""


def read_mork_source(path: Union[str, Path], magic_header: Optional[str] = None) -> bytes:
    """Read a Mork file and return the buffer following its magic header.

    Args:
        path: File to read.
        magic_header: Required substring of the first line; defaults to settings.

    Returns:
        The post-header bytes.

    Raises:
        FailedToOpenError: If the file is missing or cannot be read.
        UnsupportedVersionError: If the first line lacks the magic header.
    """
    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as e:
        raise FailedToOpenError(f"Cannot open Mork file {source}: {e}") from e
    logger.debug(f"Read {len(raw)} bytes from {source}")
    return split_magic_header(raw, magic_header)
