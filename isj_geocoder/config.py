from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_DB_PATH = "isj.sqlite3"

@dataclass
class Config:
    db_path: str
    log_level: str = "INFO"

def load_config(db_path: Optional[str] = None) -> Config:
    """从环境变量读取配置（入口脚本先调用 dotenv.load_dotenv()）；命令行参数优先。"""
    return Config(
        db_path=db_path or os.getenv("ISJ_DB_PATH") or DEFAULT_DB_PATH,
        log_level=os.getenv("ISJ_LOG_LEVEL", "INFO").upper(),
    )
