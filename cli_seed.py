from __future__ import annotations
import sys
from pathlib import Path

import dotenv

from isj_geocoder.config import load_config
from isj_geocoder.db import TABLE_SCHEMAS, connect, init_db, clear_table, write_entities
from isj_geocoder.simulate import seed_reference_entities, generate_address_lines

"""
样例参照 DB 初始化脚本：建表后写入一份小型位置参照情報，便于本地试跑和测试。
1) 确定 SQLite 路径（命令行参数 > $ISJ_DB_PATH > isj.sqlite3）；
2) 建表并清空五张参照表；
3) 写入都道府県/市区町村/大字/小字/街区样例数据；
4) 在 DB 旁边写一份带表记差异的样例输入住所；
5) 提示下一步运行 cli_run。
"""

def main() -> None:
    dotenv.load_dotenv()
    cfg = load_config(sys.argv[1] if len(sys.argv) > 1 else None)

    conn = connect(cfg.db_path)
    try:
        init_db(conn)
        # 子表先清空
        for t in reversed(list(TABLE_SCHEMAS)):
            clear_table(conn, t)
        counts = write_entities(conn, seed_reference_entities())
    finally:
        conn.close()

    sample_path = Path(cfg.db_path).with_suffix(".addresses.txt")
    lines = generate_address_lines(variants_per_address=3, seed=7)
    sample_path.write_text("".join(f"{addr}\n" for addr, _ in lines), encoding="utf-8")

    print(f"SQLite 数据写入: {cfg.db_path}")
    for table, n in counts.items():
        print(f"Inserted {table}: {n}")
    print(f"Sample addresses: {sample_path} ({len(lines)} lines)")
    print(f"Next: python cli_run.py {cfg.db_path} < {sample_path}")

if __name__ == "__main__":
    main()
