import sqlite3

import pytest

from isj_geocoder.candidates import CandidateGenerator, like_pattern
from isj_geocoder.db import ReferenceStore, clear_table, connect, write_table
from isj_geocoder.errors import StoreError
from isj_geocoder.models import ParsedAddress


def test_like_pattern():
    assert like_pattern("丸の内") == "%丸%の%内%"
    assert like_pattern("a") == "%a%"
    assert like_pattern("") == "%"


def test_like_pattern_escapes_wildcards():
    assert like_pattern("a_%") == "%a%\\_%\\%%"
    assert like_pattern("\\") == "%\\\\%"


def _names(cands):
    return sorted(c.full_name for c in cands)


class TestSearchKoaza:
    def test_gap_tolerant_match(self, store):
        cands = store.search_koaza("東京都千代田区丸の内")
        assert _names(cands) == ["東京都千代田区丸の内一丁目", "東京都千代田区丸の内二丁目"]

    def test_city_must_appear_in_input(self, store):
        assert store.search_koaza("東京都丸の内一丁目") == []

    def test_unknown_city(self, store):
        assert store.search_koaza("大阪府大阪市北区梅田") == []

    def test_empty_name_matches_nothing(self, store):
        assert store.search_koaza("") == []

    def test_aza_prefixes_in_reference_data(self, store):
        cands = store.search_koaza("東京都八王子市梅ケ丘北")
        assert len(cands) == 1
        c = cands[0]
        assert (c.ooaza, c.koaza) == ("大字梅ケ丘", "字北")
        assert c.full_name == "東京都八王子市大字梅ケ丘字北"
        assert c.latitude == pytest.approx(35.69)

    def test_underscore_in_input_is_literal(self, store):
        # 「_」不能当作单字符通配符去匹配「本町」
        assert store.search_koaza("東京都八王子市本_") == []
        assert store.search_koaza("東京都八王子市本%") == []

    def test_candidates_carry_plain_python_types(self, store):
        c = store.search_koaza("八王子市本町西")[0]
        assert type(c.koaza_id) is int
        assert c.koaza == ""


class TestSearchGaiku:
    def test_duplicates_are_returned(self, store):
        rows = store.search_gaiku(3, 5)
        assert len(rows) == 2
        assert [g.representative for g in rows] == [False, True]

    def test_null_representative(self, store):
        rows = store.search_gaiku(5, 9)
        assert len(rows) == 1
        assert rows[0].representative is False

    def test_missing_block(self, store):
        assert store.search_gaiku(1, 2) == []

    def test_number_beyond_integer_range(self, store):
        assert store.search_gaiku(7, 99999999999999999999) == []
        assert store.search_gaiku(7, 2 ** 63) == []


class TestCandidateGenerator:
    def test_normalizes_before_lookup(self, store):
        gen = CandidateGenerator(store)
        parsed = ParsedAddress(name="東京都八王子市大字梅ヶ丘字北")
        assert gen.pattern_for(parsed) == like_pattern("東京都八王子市梅ケ丘北")
        assert _names(gen.candidates_for(parsed)) == ["東京都八王子市大字梅ケ丘字北"]


class TestReferenceStoreLifecycle:
    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreError):
            ReferenceStore(tmp_path / "nope.sqlite3").open()
        assert not (tmp_path / "nope.sqlite3").exists()

    def test_missing_tables(self, tmp_path):
        path = tmp_path / "empty.sqlite3"
        sqlite3.connect(path).close()
        with pytest.raises(StoreError, match="missing tables"):
            ReferenceStore(path).open()

    def test_closed_on_exit(self, db_path):
        with ReferenceStore(db_path) as s:
            assert s.conn is not None
        assert s.conn is None
        with pytest.raises(StoreError):
            s.search_gaiku(1, 1)

    def test_closed_on_error(self, db_path):
        s = ReferenceStore(db_path)
        with pytest.raises(RuntimeError):
            with s:
                raise RuntimeError("boom")
        assert s.conn is None

    def test_read_only(self, store):
        with pytest.raises(sqlite3.OperationalError):
            store.conn.execute("DELETE FROM gaikus")


class TestWriteHelpers:
    def test_unknown_table(self, db_path):
        conn = connect(db_path)
        try:
            with pytest.raises(ValueError):
                write_table(conn, "buildings", [])
            with pytest.raises(ValueError):
                clear_table(conn, "buildings")
        finally:
            conn.close()

    def test_write_and_clear(self, db_path):
        conn = connect(db_path)
        try:
            n = write_table(conn, "gaikus", [
                {"koaza": 1, "number": 2, "latitude": 35.0, "longitude": 139.0, "representative": 1},
            ])
            assert n == 1
            clear_table(conn, "gaikus")
            assert conn.execute("SELECT count(*) FROM gaikus").fetchone()[0] == 0
        finally:
            conn.close()
