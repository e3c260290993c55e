from __future__ import annotations
import logging
from typing import List

from .db import ReferenceStore
from .models import Candidate, ParsedAddress
from .utils import like_pattern, normalize_address

logger = logging.getLogger(__name__)

__all__ = ["CandidateGenerator", "like_pattern"]


class CandidateGenerator:
    """负责“候选召回”：按地名部分从 DB 中模糊查出所有可能的小字，交给 Disambiguator 消歧。"""
    def __init__(self, store: ReferenceStore):
        self.store = store

    def pattern_for(self, parsed: ParsedAddress) -> str:
        return like_pattern(normalize_address(parsed.name))

    def candidates_for(self, parsed: ParsedAddress) -> List[Candidate]:
        cands = self.store.search_koaza(normalize_address(parsed.name))
        logger.debug("%d candidate(s) for %r", len(cands), parsed.name)
        return cands
