# core/adapters.py
import math
import numbers
import re
from typing import Any, Iterable, List, Mapping

from core.models import Alternative, Criterion, CriterionType

# Longest numeric prefix, the way the road form's parseFloat reads "12.5 m" as 12.5.
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_criterion_value(raw: Any) -> float:
    """
    Parse a stored criterion value into a float.

    Missing, empty, unparsable and non-finite values all become 0.0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, numbers.Real):
        try:
            value = float(raw)
        except OverflowError:
            return 0.0
    else:
        match = _NUMBER_PREFIX.match(str(raw))
        if match is None:
            return 0.0
        value = float(match.group(0))
    return value if math.isfinite(value) else 0.0


def parse_weight(raw: Any) -> float:
    """
    Weights arrive either as fractions (0.3) or percent strings ("30%").
    Unlike criterion values, a bad weight is a configuration error.
    """
    if isinstance(raw, str):
        text = raw.strip()
        try:
            if text.endswith("%"):
                value = float(text[:-1].strip()) / 100.0
            else:
                value = float(text)
        except ValueError:
            raise ValueError(f"invalid criterion weight: {raw!r}") from None
    elif isinstance(raw, numbers.Real) and not isinstance(raw, bool):
        try:
            value = float(raw)
        except OverflowError:
            raise ValueError(f"criterion weight must be finite, got {raw!r}") from None
    else:
        raise ValueError(f"invalid criterion weight: {raw!r}")

    if not math.isfinite(value):
        raise ValueError(f"criterion weight must be finite, got {raw!r}")
    return value


def criterion_from_record(record: Mapping[str, Any]) -> Criterion:
    """
    record: {key, type, weight, code?, name?, unit?, description?, sort_order?}
    type is case-insensitive ("Cost" and "cost" are the same).
    """
    key = str(record.get("key") or "").strip()
    if not key:
        raise ValueError("criterion record is missing 'key'")

    raw_type = str(record.get("type", "")).strip().lower()
    try:
        ctype = CriterionType(raw_type)
    except ValueError:
        raise ValueError(f"criterion {key!r}: type must be 'cost' or 'benefit', got {record.get('type')!r}") from None

    return Criterion(
        key=key,
        type=ctype,
        weight=parse_weight(record.get("weight", 0)),
        code=str(record.get("code") or ""),
        name=str(record.get("name") or ""),
        unit=record.get("unit"),
        description=record.get("description"),
        sort_order=int(record.get("sort_order") or 0),
    )


def alternative_from_record(record: Mapping[str, Any]) -> Alternative:
    """Accepts the stored road shape (id / road_id, nama_jalan, criteria_values)."""
    alt_id = record.get("id") or record.get("road_id")
    if alt_id is None or str(alt_id).strip() == "":
        raise ValueError("alternative record is missing 'id'")

    values = record.get("criteria_values") or {}
    if not isinstance(values, Mapping):
        raise ValueError(f"alternative {alt_id!r}: criteria_values must be a mapping")

    return Alternative(
        id=str(alt_id),
        criteria_values=dict(values),
        name=str(record.get("name") or record.get("nama_jalan") or ""),
    )


def sort_criteria(criteria: Iterable[Criterion]) -> List[Criterion]:
    # sorted() is stable: equal sort_order keeps input order
    return sorted(criteria, key=lambda c: c.sort_order)


def load_criteria(records: Iterable[Mapping[str, Any]]) -> List[Criterion]:
    return sort_criteria(criterion_from_record(r) for r in records)


def load_alternatives(records: Iterable[Mapping[str, Any]]) -> List[Alternative]:
    return [alternative_from_record(r) for r in records]
