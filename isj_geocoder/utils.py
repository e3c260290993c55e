from __future__ import annotations
import re
from typing import Optional

from .errors import NumeralDomainError


# 个位使用的汉数字；十/百/千位上 1 省略不写（"十" 而非 "一十"）
_KANJI_DIGITS = ("", "一", "二", "三", "四", "五", "六", "七", "八", "九")
_KANJI_PLACES = ("", "十", "百", "千")

_FULLWIDTH_TABLE = str.maketrans({
    **{chr(0xFF10 + i): str(i) for i in range(10)},
    "－": "-", "−": "-", "‐": "-", "‑": "-", "–": "-", "—": "-",
})

_OOAZA_PREFIX = re.compile(r"大?字")
_LEADING_DIGITS = re.compile(r"^[0-9]+")


def int_to_kanji(n: int) -> str:
    """把 [1, 9999] 的整数写成汉数字，与位置参照情報里丁目名的写法一致。

    >>> int_to_kanji(2021)
    '二千二十一'
    """
    if not isinstance(n, int) or not 1 <= n <= 9999:
        raise NumeralDomainError(f"kanji numeral out of range: {n!r}")

    digits = str(n)
    out = []
    # 从最高位处理到十位，个位单独处理
    for i, ch in enumerate(digits[:-1]):
        d = int(ch)
        if d == 0:
            continue
        if d > 1:
            out.append(_KANJI_DIGITS[d])
        out.append(_KANJI_PLACES[len(digits) - 1 - i])
    out.append(_KANJI_DIGITS[int(digits[-1])])
    return "".join(out)


def normalize_address(s: str) -> str:
    """吸收常见的表记差异：「〇〇ヶ丘」=「〇〇ケ丘」，「××町字〇〇」=「××町〇〇」"""
    return _OOAZA_PREFIX.sub("", s.replace("ヶ", "ケ"))


def normalize_width(s: str) -> str:
    """全角数字、各种横线统一为半角"""
    return (s or "").translate(_FULLWIDTH_TABLE)


def leading_int(token: Optional[str]) -> Optional[int]:
    m = _LEADING_DIGITS.match(token or "")
    if not m:
        return None
    return int(m.group(0))


_LIKE_ESCAPE = str.maketrans({"\\": "\\\\", "%": "\\%", "_": "\\_"})

def like_pattern(name: str) -> str:
    """在每个字符的前后插入 LIKE 通配符：保持字符顺序，但允许中间有任意间隔。
    输入中的 % _ \\ 先转义，配合 SQL 中的 ESCAPE '\\' 按字面匹配。

    >>> like_pattern("丸の内")
    '%丸%の%内%'
    """
    return "%".join(["", *(ch.translate(_LIKE_ESCAPE) for ch in name), ""])
