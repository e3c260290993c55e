from __future__ import annotations
import logging
import re
from typing import Optional, Sequence

from .models import AMBIGUOUS, NO_MATCH, RESOLVED, Candidate, ParsedAddress, Resolution
from .utils import int_to_kanji, leading_int, normalize_address


logger = logging.getLogger(__name__)

_NUMBERED_OOAZA = re.compile(r"(?:[0-9]+|[一二三四五六七八九十百千]+)丁目$")
_KANJI_NUMERAL_TAIL = re.compile(r"[〇一二三四五六七八九十百千]$")


class Disambiguator:
    """从候选小字中选出唯一一条；依次尝试 丁目号 -> 全名一致 -> 唯一无丁目的大字。

    返回 Resolution，不抛异常；AMBIGUOUS 如何处理由调用方决定。
    """

    def resolve(self, parsed: ParsedAddress, candidates: Sequence[Candidate]) -> Resolution:
        numbers = tuple(parsed.numbers)

        if not candidates:
            return Resolution(NO_MATCH, numbers=numbers, evidence={"judge": "empty_candidates"})

        if len(candidates) == 1:
            return Resolution(RESOLVED, candidates[0], numbers, {"judge": "single"})

        # 数字部分对应的丁目名存在时采用它，并把该数字从街区号中去掉
        found = self._match_chome(parsed, candidates)
        if found:
            logger.debug("Chome match for %r: %s", parsed.name, found.full_name)
            return Resolution(RESOLVED, found, numbers[1:], {"judge": "chome"})

        found = self._match_exact_name(parsed, candidates)
        if found:
            logger.debug("Exact name match for %r: %s", parsed.name, found.full_name)
            return Resolution(RESOLVED, found, numbers, {"judge": "exact_name"})

        remaining = [c for c in candidates if not _NUMBERED_OOAZA.search(c.ooaza)]
        if len(remaining) == 1:
            logger.debug("Unique unnumbered ooaza for %r: %s", parsed.name, remaining[0].full_name)
            return Resolution(RESOLVED, remaining[0], numbers, {"judge": "unnumbered_ooaza"})

        logger.debug("No unique koaza for %r among %d candidate(s)", parsed.name, len(remaining))
        return Resolution(
            AMBIGUOUS,
            numbers=numbers,
            evidence={"judge": "exhausted", "candidates": [c.full_name for c in remaining]},
        )

    def _match_chome(self, parsed: ParsedAddress, candidates: Sequence[Candidate]) -> Optional[Candidate]:
        # 地名已含丁目，或首个数字带「番」（即街区号而非丁目）时跳过
        if parsed.name.endswith("丁目") or not parsed.numbers or "番" in parsed.numbers[0]:
            return None
        n = leading_int(parsed.numbers[0])
        if n is None:
            return None
        target = int_to_kanji(n) + "丁目"
        for c in candidates:
            # 「一丁目」不能匹配到「十一丁目」：目标前一个字不能是汉数字
            if c.ooaza.endswith(target) and not _KANJI_NUMERAL_TAIL.search(c.ooaza[:-len(target)]):
                return c
        return None

    def _match_exact_name(self, parsed: ParsedAddress, candidates: Sequence[Candidate]) -> Optional[Candidate]:
        name = normalize_address(parsed.name)
        for c in candidates:
            full = normalize_address(c.full_name)
            short = normalize_address("".join([c.city, c.ooaza, c.koaza]))
            if name in (full, short):
                return c
        return None
