"""
Model breakdown engine.

Builds the per-model chart rows and the composite summary shown in the
multi-model voting panel.
"""

from __future__ import annotations

from collections.abc import Sequence

from fraudscope.models import ModelVote
from fraudscope.services.composite_scorer import composite_score
from fraudscope.services.risk_classifier import classify


def build_breakdown(votes: Sequence[ModelVote]) -> dict:
    """
    Return the composite score, its risk level, and one chart row per vote.

    Chart scores are percentages; ``weighted_score`` is ``score * weight``
    scaled the same way.  A vote weighing more than 1 is a specialized model.
    """
    composite = composite_score(votes)

    rows = [
        {
            "model": v.model_name,
            "score": v.score * 100,
            "weight": v.weight,
            "weighted_score": v.score * v.weight * 100,
            "risk_level": classify(v.score),
            "specialized": v.weight > 1,
        }
        for v in votes
    ]

    return {
        "composite_score": composite,
        "risk_level": classify(composite),
        "model_count": len(rows),
        "votes": rows,
    }
