# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
"""

# Third-Party
import pytest

# First-Party
from morkreader.config import get_settings

MAGIC_LINE = b'// <!-- <mdb:mork:z v="1.4"/> -->\n'

# A small address book: column dictionary, value dictionary, one table with
# oid and literal cells, a group region, and a top-level row.
ADDRESS_BOOK = b"""< <(a=c)> // (f=iso-8859-1)
  (80=ns:addrbk:db:row:scope:card:all)(81=ns:addrbk:db:table:kind:pab)
  (83=FirstName)(84=LastName)(87=PrimaryEmail)(88=Notes)>

<(90=Alice)(91=Smith)(92=alice@example.com)>

{1:^80 {(k^81:c)(s=9)}
  [1(^83^90)(^84^91)(^87^92)]
  [2(^83=Bob)(^84=Jones)(^87=bob$40example.com)
    (^88=line one\\
line two)]}

@$${1{@
[3:^80(^83=Carol)]
@$$}1}@
"""


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch):
    """Give every test settings built from a clean environment."""
    for name in ("MORK_DEFAULT_SCOPE", "MORK_TEXT_ENCODING", "MORK_ENCODING_ERRORS", "MORK_MAGIC_HEADER", "MORK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def address_book():
    """Post-header bytes of a small address book."""
    return ADDRESS_BOOK


@pytest.fixture
def mork_file(tmp_path):
    """Write a complete Mork file (magic header included) and return its path."""
    path = tmp_path / "abook.mab"
    path.write_bytes(MAGIC_LINE + ADDRESS_BOOK)
    return path
