from __future__ import annotations
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .errors import StoreError
from .models import Candidate, Gaiku
from .utils import like_pattern

logger = logging.getLogger(__name__)

_SQLITE_INT_MIN = -(2 ** 63)
_SQLITE_INT_MAX = 2 ** 63 - 1

TABLE_SCHEMAS: Dict[str, List[str]] = {
    "prefectures": ["id", "name"],
    "cities": ["id", "name", "prefecture"],
    "ooazas": ["id", "name", "city"],
    "koazas": ["id", "name", "ooaza", "latitude", "longitude"],
    "gaikus": ["koaza", "number", "latitude", "longitude", "representative"],
}

_DDL = """
CREATE TABLE IF NOT EXISTS prefectures (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS cities (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    prefecture INTEGER NOT NULL REFERENCES prefectures(id)
);
CREATE TABLE IF NOT EXISTS ooazas (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    city INTEGER NOT NULL REFERENCES cities(id)
);
CREATE TABLE IF NOT EXISTS koazas (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL DEFAULT '',
    ooaza INTEGER NOT NULL REFERENCES ooazas(id),
    latitude REAL,
    longitude REAL
);
CREATE TABLE IF NOT EXISTS gaikus (
    koaza INTEGER NOT NULL REFERENCES koazas(id),
    number INTEGER NOT NULL,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    representative INTEGER
);
CREATE INDEX IF NOT EXISTS gaikus_koaza_number ON gaikus (koaza, number);
"""

# :pattern 是 like_pattern() 生成的转义后带通配符的地名，:name 是未加通配符的同一地名
SEARCH_KOAZA_SQL = """
SELECT koazas.id AS koaza_id,
       prefectures.name AS prefecture,
       cities.name AS city,
       ooazas.name AS ooaza,
       koazas.name AS koaza,
       koazas.latitude AS latitude,
       koazas.longitude AS longitude
  FROM koazas
    JOIN ooazas ON ooazas.id = koazas.ooaza
    JOIN cities ON cities.id = ooazas.city
    JOIN prefectures ON prefectures.id = cities.prefecture
 WHERE ooazas.city IN (SELECT id FROM cities WHERE :name LIKE '%' || name || '%')
   AND (
     prefectures.name || cities.name || ooazas.name || koazas.name LIKE :pattern ESCAPE '\\'
     OR :name
       LIKE prefectures.name || cities.name
         || replace(replace(ooazas.name, '大字', '') || koazas.name, '字', '') || '%'
   )
 ORDER BY koazas.id
"""

SEARCH_GAIKU_SQL = """
SELECT koaza AS koaza_id, number, latitude, longitude, representative
  FROM gaikus
 WHERE koaza = :koaza_id AND number = :number
"""


def _clean_value(val: Any) -> Any:
    if val is None:
        return None
    try:
        if pd.isna(val):
            return None
    except (TypeError, ValueError):
        pass
    return val

def _row_to_dict(row: pd.Series) -> Dict[str, Any]:
    return {k: _clean_value(v) for k, v in row.to_dict().items()}

def _opt_float(val: Any) -> Optional[float]:
    return None if val is None else float(val)

def _row_to_candidate(row: Dict[str, Any]) -> Candidate:
    return Candidate(
        koaza_id=int(row["koaza_id"]),
        prefecture=row["prefecture"],
        city=row["city"],
        ooaza=row["ooaza"],
        koaza=row["koaza"] or "",
        latitude=_opt_float(row.get("latitude")),
        longitude=_opt_float(row.get("longitude")),
    )

def _row_to_gaiku(row: Dict[str, Any]) -> Gaiku:
    return Gaiku(
        koaza_id=int(row["koaza_id"]),
        number=int(row["number"]),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        representative=bool(row.get("representative")),
    )


class ReferenceStore:
    """位置参照情報 DB 的只读访问。用 with 语句打开，退出时（包括异常退出）关闭连接。"""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.conn: Optional[sqlite3.Connection] = None

    def open(self) -> "ReferenceStore":
        if self.conn is not None:
            return self
        uri = f"{self.path.resolve().as_uri()}?mode=ro"
        try:
            # 只读连接，允许 Web 服务的工作线程共用
            self.conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StoreError(f"Could not open reference store {self.path}: {exc}") from exc
        try:
            self._check_schema()
        except StoreError:
            self.close()
            raise
        logger.info("Reference store opened: %s", self.path)
        return self

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logger.debug("Reference store closed: %s", self.path)

    def __enter__(self) -> "ReferenceStore":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _check_schema(self) -> None:
        df = self._query("SELECT name FROM sqlite_master WHERE type = 'table'", {})
        missing = sorted(set(TABLE_SCHEMAS) - set(df["name"]))
        if missing:
            raise StoreError(f"Reference store {self.path} is missing tables: {', '.join(missing)}")

    def _query(self, sql: str, params: Dict[str, Any]) -> pd.DataFrame:
        if self.conn is None:
            raise StoreError("Reference store is not open")
        try:
            return pd.read_sql_query(sql, self.conn, params=params)
        except (sqlite3.Error, pd.errors.DatabaseError) as exc:
            raise StoreError(f"Query failed on {self.path}: {exc}") from exc

    def search_koaza(self, name: str) -> List[Candidate]:
        """name 为已经 normalize_address() 过的地名部分"""
        df = self._query(SEARCH_KOAZA_SQL, {"pattern": like_pattern(name), "name": name})
        return [_row_to_candidate(_row_to_dict(row)) for _, row in df.iterrows()]

    def search_gaiku(self, koaza_id: int, number: int) -> List[Gaiku]:
        # 超出 SQLite INTEGER 范围的街区号不可能存在
        if not _SQLITE_INT_MIN <= int(number) <= _SQLITE_INT_MAX:
            return []
        df = self._query(SEARCH_GAIKU_SQL, {"koaza_id": int(koaza_id), "number": int(number)})
        return [_row_to_gaiku(_row_to_dict(row)) for _, row in df.iterrows()]


def connect(db_path: str | Path) -> sqlite3.Connection:
    """可写连接，仅用于建表和写入样例数据；解析引擎本身只用 ReferenceStore。"""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(path)

def init_db(conn: sqlite3.Connection) -> None:
    conn.executescript(_DDL)
    conn.commit()

def clear_table(conn: sqlite3.Connection, table: str) -> None:
    if table not in TABLE_SCHEMAS:
        raise ValueError(f"Unknown table: {table}")
    conn.execute(f"DELETE FROM {table}")
    conn.commit()

def write_table(conn: sqlite3.Connection, table: str, rows: Iterable[Dict[str, Any]]) -> int:
    if table not in TABLE_SCHEMAS:
        raise ValueError(f"Unknown table: {table}")
    df = pd.DataFrame(list(rows), columns=TABLE_SCHEMAS[table])
    if df.empty:
        return 0
    df.to_sql(table, conn, if_exists="append", index=False)
    conn.commit()
    return len(df)

def write_entities(conn: sqlite3.Connection, entities: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
    """按 TABLE_SCHEMAS 的顺序（父表在前）写入多张表，返回各表写入行数"""
    counts: Dict[str, int] = {}
    for table in TABLE_SCHEMAS:
        counts[table] = write_table(conn, table, entities.get(table, []))
    return counts
