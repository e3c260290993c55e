from __future__ import annotations
from typing import List


class GeocoderError(RuntimeError):
    pass


class StoreError(GeocoderError):
    """位置参照情報 DB 不可用：文件缺失、表结构不完整或查询失败。"""


class AmbiguousMatchError(GeocoderError):
    """消歧阶段全部失败，无法唯一确定小字。整批处理随之中止。"""

    def __init__(self, address: str, candidates: List[str]):
        self.address = address
        self.candidates = list(candidates)
        super().__init__(f"Could not determine a koaza for {address!r} in: {self.candidates}")


class NumeralDomainError(ValueError):
    pass
