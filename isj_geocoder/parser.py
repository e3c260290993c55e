from __future__ import annotations
import logging
import re

from .models import ParsedAddress
from .utils import int_to_kanji, normalize_width

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_NAME_AND_NUMBERS = re.compile(r"^([^0-9]*)(.*)$", re.S)
# 在“非数字 -> 数字”的边界切分："1丁目2-3" => ["1丁目", "2-", "3"]
_NUMBER_BOUNDARY = re.compile(r"(?<=[^0-9])(?=[0-9])")
_CHOME_TOKEN = re.compile(r"^([0-9]+)丁目\s*")


class AddressTokenizer:
    """把一行地址切成「地名部分」与其后的数字 token（街区号/地番等）。"""

    def tokenize(self, line: str) -> ParsedAddress:
        text = _WHITESPACE.sub("", normalize_width(line))

        # 以第一次出现的半角数字为界
        m = _NAME_AND_NUMBERS.match(text)
        name, rest = m.group(1), m.group(2)
        numbers = _NUMBER_BOUNDARY.split(rest) if rest else []

        # 数据库中丁目名用汉数字书写，这里把 "3丁目" 并回地名并改写成 "三丁目"
        if numbers:
            chome = _CHOME_TOKEN.match(numbers[0])
            if chome:
                numbers.pop(0)
                name += int_to_kanji(int(chome.group(1))) + "丁目"

        parsed = ParsedAddress(name=name, numbers=tuple(numbers))
        logger.debug("Tokenized %r -> %s", line, parsed)
        return parsed
