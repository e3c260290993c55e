from __future__ import annotations
import random
from typing import Any, Dict, List, Tuple


"""
位置参照情報样例数据生成器
1. seed_reference_entities()：一份很小的参照 DB（都道府県/市区町村/大字/小字/街区），
   覆盖了消歧的各个分支：
    丸の内一丁目 / 丸の内二丁目：同名大字靠丁目号区分
    本町 / 本町西 / 元本郷町 / 元本郷町一丁目：模糊匹配会召回多个候选
    大字梅ケ丘 + 字北：带「大字」「字」前缀的大字/小字名
    街区中有重复行（代表点在第二行）以及没有代表点标记的行
2. generate_address_lines()：为若干已知住所生成带表记差异的输入行
   （全角数字、空格、「ヶ」、省略「大字」「字」），附带期望的匹配结果。
"""

def seed_reference_entities() -> Dict[str, List[Dict[str, Any]]]:
    prefectures = [
        {"id": 1, "name": "東京都"},
    ]
    cities = [
        {"id": 1, "name": "千代田区", "prefecture": 1},
        {"id": 2, "name": "八王子市", "prefecture": 1},
    ]
    ooazas = [
        {"id": 1, "name": "丸の内一丁目", "city": 1},
        {"id": 2, "name": "丸の内二丁目", "city": 1},
        {"id": 3, "name": "本町", "city": 2},
        {"id": 4, "name": "本町西", "city": 2},
        {"id": 5, "name": "元本郷町", "city": 2},
        {"id": 6, "name": "元本郷町一丁目", "city": 2},
        {"id": 7, "name": "大字梅ケ丘", "city": 2},
    ]
    # 小字坐标即大字·町丁目级代表点
    koazas = [
        {"id": 1, "name": "", "ooaza": 1, "latitude": 35.6812, "longitude": 139.7649},
        {"id": 2, "name": "", "ooaza": 2, "latitude": 35.6830, "longitude": 139.7640},
        {"id": 3, "name": "", "ooaza": 3, "latitude": 35.6580, "longitude": 139.3320},
        {"id": 4, "name": "", "ooaza": 4, "latitude": 35.6570, "longitude": 139.3290},
        {"id": 5, "name": "", "ooaza": 5, "latitude": 35.6620, "longitude": 139.3190},
        {"id": 6, "name": "", "ooaza": 6, "latitude": 35.6640, "longitude": 139.3150},
        {"id": 7, "name": "字北", "ooaza": 7, "latitude": 35.6900, "longitude": 139.2800},
    ]
    gaikus = [
        {"koaza": 1, "number": 1, "latitude": 35.68101, "longitude": 139.76512, "representative": 1},
        {"koaza": 2, "number": 3, "latitude": 35.68311, "longitude": 139.76388, "representative": 1},
        {"koaza": 3, "number": 5, "latitude": 35.65820, "longitude": 139.33180, "representative": 0},
        {"koaza": 3, "number": 5, "latitude": 35.65830, "longitude": 139.33170, "representative": 1},
        {"koaza": 5, "number": 9, "latitude": 35.66230, "longitude": 139.31870, "representative": None},
        {"koaza": 7, "number": 3, "latitude": 35.69020, "longitude": 139.27980, "representative": 1},
    ]
    return {
        "prefectures": prefectures,
        "cities": cities,
        "ooazas": ooazas,
        "koazas": koazas,
        "gaikus": gaikus,
    }

# (输入住所, 期望匹配住所)
_BASE_ADDRESSES: List[Tuple[str, str]] = [
    ("東京都千代田区丸の内1丁目1-1", "東京都千代田区丸の内一丁目1"),
    ("東京都千代田区丸の内2-3", "東京都千代田区丸の内二丁目3"),
    ("東京都八王子市本町5", "東京都八王子市本町5"),
    ("東京都八王子市元本郷9番地", "東京都八王子市元本郷町9"),
    ("東京都八王子市大字梅ヶ丘字北3", "東京都八王子市大字梅ケ丘字北3"),
]

_FULLWIDTH = str.maketrans("0123456789-", "０１２３４５６７８９－")

def _variant(addr: str, rng: random.Random) -> str:
    out = addr
    if rng.random() < 0.5:
        out = out.translate(_FULLWIDTH)
    if rng.random() < 0.5:
        out = out.replace("ヶ", "ケ")
    if rng.random() < 0.5:
        out = out.replace("大字", "").replace("字", "")
    if rng.random() < 0.3:
        # 在都道府県名后插入空格
        out = out.replace("都", "都 ", 1)
    return out

def generate_address_lines(variants_per_address: int = 3, seed: int = 7) -> List[Tuple[str, str]]:
    rng = random.Random(seed)
    lines: List[Tuple[str, str]] = []
    for addr, expected in _BASE_ADDRESSES:
        lines.append((addr, expected))
        for _ in range(variants_per_address):
            lines.append((_variant(addr, rng), expected))
    return lines
