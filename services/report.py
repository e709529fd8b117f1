# services/report.py
from typing import List, Sequence

import pandas as pd

from core.formatting import format_score
from core.models import TopsisResult
from core.topsis import TopsisArtifacts

RANKING_COLUMNS = [
    "rank", "alternative_id", "score", "score_pct", "category",
    "distance_positive", "distance_negative",
]
DISTANCE_COLUMNS = ["alternative", "d_pos", "d_neg", "score"]
IDEAL_COLUMNS = ["criterion", "pos_ideal", "neg_ideal"]


def ranking_frame(results: Sequence[TopsisResult]) -> pd.DataFrame:
    rows: List[dict] = [
        {
            "rank": r.rank,
            "alternative_id": r.alternative_id,
            "score": r.score,
            "score_pct": format_score(r.score),
            "category": r.category.value,
            "distance_positive": r.distance_positive,
            "distance_negative": r.distance_negative,
        }
        for r in results
    ]
    return pd.DataFrame(rows, columns=RANKING_COLUMNS)


def distances_frame(details: TopsisArtifacts, alternative_ids: Sequence[str]) -> pd.DataFrame:
    """Input order, not rank order; sort on 'score' for the ranked view."""
    if len(details.scores) == 0:
        return pd.DataFrame(columns=DISTANCE_COLUMNS)
    return pd.DataFrame({
        "alternative": list(alternative_ids),
        "d_pos": details.distance_positive,
        "d_neg": details.distance_negative,
        "score": details.scores,
    }, columns=DISTANCE_COLUMNS)


def ideals_frame(details: TopsisArtifacts, criteria_keys: Sequence[str]) -> pd.DataFrame:
    if len(details.ideal_positive) == 0:
        return pd.DataFrame(columns=IDEAL_COLUMNS)
    return pd.DataFrame({
        "criterion": list(criteria_keys),
        "pos_ideal": details.ideal_positive,
        "neg_ideal": details.ideal_negative,
    }, columns=IDEAL_COLUMNS)


def matrix_frame(
    details: TopsisArtifacts,
    which: str,
    alternative_ids: Sequence[str],
    criteria_keys: Sequence[str],
) -> pd.DataFrame:
    matrices = {
        "decision": details.decision_matrix,
        "normalized": details.normalized_matrix,
        "weighted": details.weighted_matrix,
    }
    if which not in matrices:
        raise ValueError("which must be 'decision', 'normalized' or 'weighted'")

    matrix = matrices[which]
    if matrix.size == 0:
        return pd.DataFrame()

    df = pd.DataFrame(matrix, index=list(alternative_ids), columns=list(criteria_keys))
    df.index.name = "alternative"
    df.columns.name = "criterion"
    return df


def to_csv_bytes(frame: pd.DataFrame, index: bool = False) -> bytes:
    return frame.to_csv(index=index).encode("utf-8")
