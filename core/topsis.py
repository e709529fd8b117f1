# core/topsis.py
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from core.adapters import parse_criterion_value
from core.config import CategoryThresholds
from core.models import Alternative, Criterion, CriterionType, TopsisResult

logger = logging.getLogger(__name__)

Direction = Union[CriterionType, str]


@dataclass(frozen=True)
class TopsisArtifacts:
    decision_matrix: np.ndarray    # x_ij
    normalized_matrix: np.ndarray  # r_ij
    weighted_matrix: np.ndarray    # y_ij
    ideal_positive: np.ndarray     # A+
    ideal_negative: np.ndarray     # A-
    distance_positive: np.ndarray  # D+
    distance_negative: np.ndarray  # D-
    scores: np.ndarray             # V, input order

    @classmethod
    def empty(cls) -> "TopsisArtifacts":
        matrix = np.zeros((0, 0), dtype=float)
        vector = np.zeros(0, dtype=float)
        return cls(
            decision_matrix=matrix,
            normalized_matrix=matrix,
            weighted_matrix=matrix,
            ideal_positive=vector,
            ideal_negative=vector,
            distance_positive=vector,
            distance_negative=vector,
            scores=vector,
        )


def build_decision_matrix(
    alternatives: Sequence[Alternative],
    criteria: Sequence[Criterion],
) -> np.ndarray:
    """Rows follow alternatives, columns follow criteria. Missing or bad values are 0."""
    m, n = len(alternatives), len(criteria)
    matrix = np.zeros((m, n), dtype=float)
    for i, alt in enumerate(alternatives):
        for j, c in enumerate(criteria):
            matrix[i, j] = parse_criterion_value(alt.criteria_values.get(c.key))
    return matrix


def normalize_matrix(matrix: np.ndarray) -> np.ndarray:
    """
    Vector normalization: r_ij = x_ij / sqrt(sum_i x_ij^2).
    A column whose norm is 0 normalizes to all zeros.
    """
    m, n = matrix.shape
    if m == 0:
        return np.zeros((0, n), dtype=float)

    peak = np.abs(matrix).max(axis=0)
    zero = peak == 0
    if zero.any():
        logger.debug("zero-norm columns %s normalized to 0", np.flatnonzero(zero).tolist())

    # power-of-two column scale: exact division, and squares stay finite for huge values
    _, exponent = np.frexp(peak)
    scaled = matrix / np.ldexp(1.0, exponent)
    norms = np.sqrt((scaled ** 2).sum(axis=0))
    return np.where(zero, 0.0, scaled / np.where(zero, 1.0, norms))


def weight_matrix(normalized: np.ndarray, weights: np.ndarray) -> np.ndarray:
    return normalized * weights


def find_ideal_solutions(
    weighted: np.ndarray,
    directions: Sequence[Direction],
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Benefit columns: A+ = max, A- = min. Cost columns: A+ = min, A- = max.
    With no rows both vectors are empty.
    """
    m, n = weighted.shape
    if m == 0:
        return np.zeros(0, dtype=float), np.zeros(0, dtype=float)

    pis = np.zeros(n, dtype=float)
    nis = np.zeros(n, dtype=float)
    for j, d in enumerate(directions):
        col = weighted[:, j]
        if CriterionType(d) is CriterionType.BENEFIT:
            pis[j] = np.max(col)
            nis[j] = np.min(col)
        else:
            pis[j] = np.min(col)
            nis[j] = np.max(col)
    return pis, nis


def calculate_distances(
    weighted: np.ndarray,
    ideal_positive: np.ndarray,
    ideal_negative: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    if weighted.shape[0] == 0:
        return np.zeros(0, dtype=float), np.zeros(0, dtype=float)
    d_pos = np.sqrt(((weighted - ideal_positive) ** 2).sum(axis=1))
    d_neg = np.sqrt(((weighted - ideal_negative) ** 2).sum(axis=1))
    return d_pos, d_neg


def calculate_preference_scores(d_pos: np.ndarray, d_neg: np.ndarray) -> np.ndarray:
    """V = D- / (D+ + D-); rows sitting on both ideals (D+ = D- = 0) score 0."""
    total = d_pos + d_neg
    degenerate = total == 0
    if degenerate.any():
        logger.debug("%d alternative(s) with D+ = D- = 0 scored 0", int(degenerate.sum()))
    denom = np.where(degenerate, 1.0, total)
    return np.where(degenerate, 0.0, d_neg / denom)


def compute_topsis(
    matrix: np.ndarray,
    weights: np.ndarray,
    directions: Sequence[Direction],
) -> TopsisArtifacts:
    """
    matrix: shape (m, n)
    weights: shape (n,); used as given, no rescaling to sum 1
    directions: 'benefit' or 'cost' per column, length n
    """
    matrix = np.asarray(matrix, dtype=float)
    weights = np.asarray(weights, dtype=float)
    if matrix.ndim != 2:
        raise ValueError("matrix must be 2D")
    m, n = matrix.shape
    if weights.shape != (n,):
        raise ValueError("weights must have shape (n,)")
    if len(directions) != n:
        raise ValueError("directions length must match number of criteria")
    for d in directions:
        try:
            CriterionType(d)
        except ValueError:
            raise ValueError(f"direction must be 'benefit' or 'cost', got {d!r}") from None

    logger.debug("topsis on %dx%d matrix", m, n)

    r = normalize_matrix(matrix)
    y = weight_matrix(r, weights)
    pis, nis = find_ideal_solutions(y, directions)
    d_pos, d_neg = calculate_distances(y, pis, nis)
    scores = calculate_preference_scores(d_pos, d_neg)

    return TopsisArtifacts(
        decision_matrix=matrix,
        normalized_matrix=r,
        weighted_matrix=y,
        ideal_positive=pis,
        ideal_negative=nis,
        distance_positive=d_pos,
        distance_negative=d_neg,
        scores=scores,
    )


def rank_alternatives(
    alternatives: Sequence[Alternative],
    artifacts: TopsisArtifacts,
    thresholds: Optional[CategoryThresholds] = None,
) -> List[TopsisResult]:
    """
    Sort by descending V and assign rank 1..m. The sort is stable, so among
    equal scores the alternative that came first in the input ranks higher.
    """
    thresholds = thresholds or CategoryThresholds()
    order = np.argsort(-artifacts.scores, kind="stable")

    results: List[TopsisResult] = []
    for rank, i in enumerate(order, start=1):
        score = float(artifacts.scores[i])
        results.append(
            TopsisResult(
                alternative_id=alternatives[i].id,
                score=score,
                rank=rank,
                category=thresholds.categorize(score),
                distance_positive=float(artifacts.distance_positive[i]),
                distance_negative=float(artifacts.distance_negative[i]),
            )
        )
    return results


def compute_with_details(
    alternatives: Sequence[Alternative],
    criteria: Sequence[Criterion],
    thresholds: Optional[CategoryThresholds] = None,
) -> Tuple[List[TopsisResult], TopsisArtifacts]:
    if not alternatives or not criteria:
        return [], TopsisArtifacts.empty()

    matrix = build_decision_matrix(alternatives, criteria)
    artifacts = compute_topsis(
        matrix=matrix,
        weights=np.array([c.weight for c in criteria], dtype=float),
        directions=[c.type for c in criteria],
    )
    return rank_alternatives(alternatives, artifacts, thresholds), artifacts


def compute(
    alternatives: Sequence[Alternative],
    criteria: Sequence[Criterion],
    thresholds: Optional[CategoryThresholds] = None,
) -> List[TopsisResult]:
    """Rank alternatives by closeness to the ideal solution. Never raises on empty input."""
    results, _ = compute_with_details(alternatives, criteria, thresholds)
    return results
