# services/topsis_service.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from core.config import Settings, get_settings
from core.models import Alternative, Category, Criterion, TopsisResult
from core.topsis import TopsisArtifacts, compute_with_details
from services.validation import validate_criteria

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopsisRun:
    batch_id: str
    created_at: datetime
    alternatives: List[Alternative]
    criteria: List[Criterion]
    results: List[TopsisResult]
    details: TopsisArtifacts
    issues: List[str]

    def category_counts(self) -> Dict[Category, int]:
        counts = {c: 0 for c in Category}
        for r in self.results:
            counts[r.category] += 1
        return counts

    def to_records(self) -> List[dict]:
        """
        One row per result in rank order, in the shape the analysis results
        store expects. Snapshots freeze the inputs this batch was ranked on.
        """
        alt_by_id = {a.id: a for a in self.alternatives}
        weights_snapshot = {c.key: c.weight for c in self.criteria}

        rows: List[dict] = []
        for r in self.results:
            alt = alt_by_id[r.alternative_id]
            rows.append({
                "road_id": r.alternative_id,
                "score": r.score,
                "rank": r.rank,
                "category": r.category.label,
                "distance_positive": r.distance_positive,
                "distance_negative": r.distance_negative,
                "criteria_snapshot": {c.key: alt.criteria_values.get(c.key) for c in self.criteria},
                "weights_snapshot": dict(weights_snapshot),
                "analysis_batch_id": self.batch_id,
            })
        return rows


class TopsisService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def run(self, alternatives: Sequence[Alternative], criteria: Sequence[Criterion]) -> TopsisRun:
        alternatives = list(alternatives)
        criteria = list(criteria)

        _, issues = validate_criteria(criteria, tolerance=self.settings.weight_tolerance)
        for msg in issues:
            logger.warning("criteria check: %s", msg)

        batch_id = str(uuid.uuid4())
        logger.info(
            "topsis batch %s: %d alternatives x %d criteria",
            batch_id, len(alternatives), len(criteria),
        )

        results, details = compute_with_details(
            alternatives, criteria, thresholds=self.settings.thresholds,
        )

        run = TopsisRun(
            batch_id=batch_id,
            created_at=datetime.now(timezone.utc),
            alternatives=alternatives,
            criteria=criteria,
            results=results,
            details=details,
            issues=issues,
        )
        counts = run.category_counts()
        logger.info(
            "topsis batch %s done: high=%d medium=%d low=%d",
            batch_id, counts[Category.HIGH], counts[Category.MEDIUM], counts[Category.LOW],
        )
        return run
