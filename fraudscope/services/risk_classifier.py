"""
Risk classifier.

Maps a continuous score onto one of five ordered risk levels using the
lower-bound-inclusive thresholds from the config.
"""

from __future__ import annotations

from fraudscope.config import FALLBACK_RISK_LEVEL, RISK_THRESHOLDS
from fraudscope.models import RiskLevel


def classify(score: float) -> RiskLevel:
    """
    Return the risk level for *score*.

    Total over all floats: anything below the lowest threshold (negative
    scores included) is ``safe``, anything at or above 0.8 is ``critical``.
    """
    for threshold, level in RISK_THRESHOLDS:
        if score >= threshold:
            return RiskLevel(level)
    return RiskLevel(FALLBACK_RISK_LEVEL)
