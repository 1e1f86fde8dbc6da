# -*- coding: utf-8 -*-
"""Location: ./morkreader/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Mork Reader.
Decoder for the Mozilla Mork text database format.
"""

__version__ = "0.1.0"

# First-Party
from morkreader.database import MorkDatabase  # noqa: E402
from morkreader.errors import FailedToOpenError, MalformedInputError, MorkError, MorkErrorKind, UnsupportedVersionError  # noqa: E402
from morkreader.parser import decode, MorkParser, open_mork  # noqa: E402

__all__ = [
    "FailedToOpenError",
    "MalformedInputError",
    "MorkDatabase",
    "MorkError",
    "MorkErrorKind",
    "MorkParser",
    "UnsupportedVersionError",
    "__version__",
    "decode",
    "open_mork",
]
