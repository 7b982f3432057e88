"""
Composite scoring engine.

Reduces a set of per-model votes to a single weighted-mean fraud score.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from fraudscope.exceptions import InvalidInputError
from fraudscope.logger import get_logger
from fraudscope.models import ModelVote

logger = get_logger(__name__)


def composite_score(votes: Iterable[ModelVote]) -> float:
    """
    Weighted mean ``sum(score * weight) / sum(weight)`` over *votes*.

    Raises ``InvalidInputError`` for an empty vote set, a non-finite score
    or weight, or a zero total weight instead of returning NaN / infinity.
    """
    votes = list(votes)
    if not votes:
        raise InvalidInputError("empty vote set")
    if not all(math.isfinite(v.score) and math.isfinite(v.weight) for v in votes):
        raise InvalidInputError("non-finite vote")

    # Weights are scaled by the largest magnitude so huge weights cannot overflow
    largest = max(abs(v.weight) for v in votes)
    if largest == 0:
        raise InvalidInputError("zero total weight")
    scaled = [(v.score, v.weight / largest) for v in votes]

    # fsum keeps the result independent of vote order
    total_weight = math.fsum(w for _, w in scaled)
    if total_weight == 0:
        raise InvalidInputError("zero total weight")

    try:
        weighted_sum = math.fsum(s * w for s, w in scaled)
        score = weighted_sum / total_weight
    except OverflowError:
        raise InvalidInputError("composite score out of range") from None
    if not math.isfinite(score):
        raise InvalidInputError("composite score out of range")

    logger.debug("composite_scored", votes=len(votes), score=score)
    return score
