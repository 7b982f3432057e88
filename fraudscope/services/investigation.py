"""
Investigation assembler.

Combines the breakdown, segment builder and risk classifier into the
single payload behind the investigation report view.
"""

from __future__ import annotations

from fraudscope.models import AnalysisResult
from fraudscope.services.breakdown_engine import build_breakdown
from fraudscope.services.segment_builder import annotate, build_segments
from fraudscope.utils.display import as_percent


def build_investigation(analysis: AnalysisResult) -> dict:
    """
    Return the full investigation report for *analysis*.

    The composite score is recomputed from the stored votes rather than
    trusted from an upstream field.
    """
    breakdown = build_breakdown(analysis.model_votes)
    segments = annotate(build_segments(analysis.source_text, analysis.highlights))
    level = breakdown["risk_level"]

    return {
        "id": analysis.id,
        "source_text": analysis.source_text,
        "timestamp": analysis.timestamp,
        "composite_score": breakdown["composite_score"],
        "risk_level": level,
        "summary": {
            "fraud_confidence": as_percent(breakdown["composite_score"]),
            "risk_label": f"{level.value.title()} Risk",
            "models_analyzed": breakdown["model_count"],
            "suspicious_segments": len(analysis.highlights),
            "word_count": analysis.metadata.word_count,
            "file_type": analysis.metadata.file_type,
        },
        "breakdown": breakdown,
        "segments": segments,
        "highlights": sorted(analysis.highlights, key=lambda h: h.start_index),
    }
