# core/models.py
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class CriterionType(str, Enum):
    COST = "cost"
    BENEFIT = "benefit"


class Category(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def label(self) -> str:
        """Label shown to road maintenance staff."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: Dict[Category, str] = {
    Category.HIGH: "Prioritas Tinggi",
    Category.MEDIUM: "Prioritas Sedang",
    Category.LOW: "Prioritas Rendah",
}


@dataclass(frozen=True)
class Criterion:
    key: str
    type: CriterionType
    weight: float
    code: str = ""
    name: str = ""
    unit: Optional[str] = None
    description: Optional[str] = None
    sort_order: int = 0

    def __post_init__(self):
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, "type", CriterionType(self.type))
        weight = float(self.weight)
        if not math.isfinite(weight):
            raise ValueError(f"criterion {self.key!r} has a non-finite weight")
        object.__setattr__(self, "weight", weight)


@dataclass(frozen=True)
class Alternative:
    """A road to be ranked.

    criteria_values maps criterion key -> raw value. Values may be numbers or
    the string form stored by the road form; the matrix builder parses them.
    """
    id: str
    criteria_values: Dict[str, Any] = field(default_factory=dict)
    name: str = ""


@dataclass(frozen=True)
class TopsisResult:
    alternative_id: str
    score: float                # V
    rank: int
    category: Category
    distance_positive: float    # D+
    distance_negative: float    # D-
