from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional, TextIO

import dotenv

from isj_geocoder.config import load_config
from isj_geocoder.db import ReferenceStore
from isj_geocoder.errors import AmbiguousMatchError, NumeralDomainError, StoreError
from isj_geocoder.pipeline import GeocodingPipeline

"""
住所 -> 坐标 批处理入口：从标准输入逐行读取住所，向标准输出写 TSV。
输出列：1 输入住所 / 2 DB 中匹配到的住所 / 3 纬度 / 4 经度 /
       5 精度（0: 街区级位置参照情報，1: 大字·町丁目级位置参照情報；未匹配为空）
日志写到标准错误，标准输出只有 TSV。
"""

logger = logging.getLogger("isj_geocoder.cli")


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    dotenv.load_dotenv()

    ap = argparse.ArgumentParser(description="Resolve Japanese addresses to coordinates (TSV on stdout).")
    ap.add_argument("db_path", nargs="?", help="位置参照情報 SQLite DB（默认 $ISJ_DB_PATH 或 isj.sqlite3）")
    args = ap.parse_args(argv)

    cfg = load_config(args.db_path)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        with ReferenceStore(cfg.db_path) as store:
            pipe = GeocodingPipeline(store, stdout)
            stats = pipe.run(stdin)
    except AmbiguousMatchError as exc:
        logger.error("Ambiguous address %r, candidates: %s", exc.address, exc.candidates)
        return 1
    except NumeralDomainError as exc:
        logger.error("Malformed numeral in input: %s", exc)
        return 1
    except StoreError as exc:
        logger.error("Reference store error: %s", exc)
        return 1

    logger.info("Geocoding finished: %s", stats)
    return 0

if __name__ == "__main__":
    sys.exit(main())
