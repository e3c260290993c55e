from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# 输出第 5 列：0 = 街区级坐标，1 = 退回到大字·町丁目级坐标
LEVEL_GAIKU = 0
LEVEL_OOAZA = 1

RESOLVED = "RESOLVED"
NO_MATCH = "NO_MATCH"
AMBIGUOUS = "AMBIGUOUS"

@dataclass(frozen=True)
class ParsedAddress:
    name: str
    numbers: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Candidate:
    koaza_id: int
    prefecture: str
    city: str
    ooaza: str
    koaza: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def full_name(self) -> str:
        return "".join([self.prefecture, self.city, self.ooaza, self.koaza])

@dataclass(frozen=True)
class Gaiku:
    koaza_id: int
    number: int
    latitude: float
    longitude: float
    representative: bool = False

@dataclass
class Resolution:
    decision: str
    candidate: Optional[Candidate] = None
    numbers: Tuple[str, ...] = ()
    evidence: Dict[str, Any] = field(default_factory=dict)

@dataclass
class ResolvedAddress:
    address: str
    matched: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    level: Optional[int] = None

    def to_row(self) -> List[Any]:
        return [self.address, self.matched, self.latitude, self.longitude, self.level]
