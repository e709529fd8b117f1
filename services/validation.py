# services/validation.py
from collections import Counter
from typing import List, Sequence, Tuple

from core.config import WEIGHT_SUM_TOLERANCE
from core.models import Criterion


def weight_total(criteria: Sequence[Criterion]) -> float:
    return float(sum(c.weight for c in criteria))


def validate_criteria(
    criteria: Sequence[Criterion],
    tolerance: float = WEIGHT_SUM_TOLERANCE,
) -> Tuple[bool, List[str]]:
    """
    Advisory checks on a criteria set. The engine ranks regardless of the
    outcome; callers decide whether to block on the returned issues.
    """
    issues: List[str] = []

    negative = [c.key for c in criteria if c.weight < 0]
    if negative:
        issues.append(f"Weights contain negative values: {', '.join(negative)}.")

    dupes = sorted(k for k, count in Counter(c.key for c in criteria).items() if count > 1)
    if dupes:
        issues.append(f"Duplicate criterion keys: {', '.join(dupes)}.")

    total = weight_total(criteria)
    if abs(total - 1) >= tolerance:
        direction = "short by" if total < 1 else "over by"
        issues.append(
            f"Total weight must be 100%. Currently {total * 100:.1f}%, "
            f"{direction} {abs((total - 1) * 100):.1f}%."
        )

    return (len(issues) == 0), issues
