from __future__ import annotations

import pytest

from isj_geocoder.db import ReferenceStore, connect, init_db, write_entities
from isj_geocoder.simulate import seed_reference_entities


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "isj.sqlite3"
    conn = connect(path)
    try:
        init_db(conn)
        write_entities(conn, seed_reference_entities())
    finally:
        conn.close()
    return path


@pytest.fixture
def store(db_path):
    with ReferenceStore(db_path) as s:
        yield s
