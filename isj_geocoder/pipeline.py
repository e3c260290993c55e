from __future__ import annotations
import csv
import logging
from typing import Dict, Iterable, Optional, TextIO, Tuple

from .candidates import CandidateGenerator
from .db import ReferenceStore
from .errors import AmbiguousMatchError, NumeralDomainError
from .judge import Disambiguator
from .models import (
    AMBIGUOUS,
    LEVEL_GAIKU,
    LEVEL_OOAZA,
    NO_MATCH,
    Candidate,
    Gaiku,
    Resolution,
    ResolvedAddress,
)
from .parser import AddressTokenizer
from .utils import leading_int

logger = logging.getLogger(__name__)


def pick_gaiku(rows: Iterable[Gaiku]) -> Optional[Gaiku]:
    """优先取代表点；没有代表点时取第一行"""
    rows = list(rows)
    for g in rows:
        if g.representative:
            return g
    return rows[0] if rows else None


class GeocodingPipeline:
    """住所 -> 坐标 主流程：切分 -> 候选召回 -> 消歧 -> 街区定位（失败时退回大字级坐标）。

    store 与输出流由调用方打开/关闭，这里只负责使用。
    """

    def __init__(self, store: ReferenceStore, out: Optional[TextIO] = None):
        self.store = store
        self.tokenizer = AddressTokenizer()
        self.cand_gen = CandidateGenerator(store)
        self.disambiguator = Disambiguator()
        self.writer = csv.writer(out, delimiter="\t", lineterminator="\n") if out is not None else None

    def geocode(self, address: str) -> Tuple[Resolution, ResolvedAddress]:
        parsed = self.tokenizer.tokenize(address)
        cands = self.cand_gen.candidates_for(parsed)
        resolution = self.disambiguator.resolve(parsed, cands)

        if resolution.decision in (NO_MATCH, AMBIGUOUS):
            return resolution, ResolvedAddress(address)

        return resolution, self._locate(address, resolution.candidate, resolution.numbers)

    def _locate(self, address: str, cand: Candidate, numbers: Tuple[str, ...]) -> ResolvedAddress:
        number = leading_int(numbers[0]) if numbers else None
        if number is not None:
            gaiku = pick_gaiku(self.store.search_gaiku(cand.koaza_id, number))
            if gaiku:
                return ResolvedAddress(
                    address, f"{cand.full_name}{number}", gaiku.latitude, gaiku.longitude, LEVEL_GAIKU
                )
            logger.debug("No gaiku %s in koaza %s, falling back to ooaza", number, cand.koaza_id)
        # 没有街区级数据时用大字·町丁目级的代表点代替
        return ResolvedAddress(address, cand.full_name, cand.latitude, cand.longitude, LEVEL_OOAZA)

    def run(self, lines: Iterable[str]) -> Dict[str, int]:
        if self.writer is None:
            raise RuntimeError("GeocodingPipeline.run() needs an output stream")

        stats = {"n_lines": 0, "n_gaiku": 0, "n_ooaza": 0, "n_unmatched": 0}
        for line in lines:
            address = line.rstrip("\r\n")
            try:
                resolution, result = self.geocode(address)
            except NumeralDomainError as exc:
                raise NumeralDomainError(f"{exc} in {address!r}") from exc
            if resolution.decision == AMBIGUOUS:
                raise AmbiguousMatchError(address, resolution.evidence.get("candidates", []))

            self.writer.writerow(result.to_row())
            stats["n_lines"] += 1
            if result.level == LEVEL_GAIKU:
                stats["n_gaiku"] += 1
            elif result.level == LEVEL_OOAZA:
                stats["n_ooaza"] += 1
            else:
                stats["n_unmatched"] += 1
        return stats
