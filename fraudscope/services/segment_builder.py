"""
Segment builder.

Splits a document into an ordered run of plain and highlighted segments
given a set of flagged spans.  Spans are validated up front: offsets must
lie inside the text, the declared text must match the slice it claims, and
no two spans may overlap.

Offsets are Python string indices, i.e. Unicode code points.  Clients that
count UTF-16 units must convert before sending text outside the BMP.
"""

from __future__ import annotations

from collections.abc import Sequence

from fraudscope.exceptions import OverlapError, RangeError, ValidationError
from fraudscope.models import HighlightedSegment, RiskLevel, Segment
from fraudscope.services.risk_classifier import classify
from fraudscope.utils.display import highlight_tone


def _validate(source_text: str, ordered: list[HighlightedSegment]) -> None:
    length = len(source_text)
    furthest_end = 0

    for h in ordered:
        if not (0 <= h.start_index < h.end_index <= length):
            raise RangeError(
                f"span [{h.start_index}, {h.end_index}) is invalid for text of length {length}"
            )
        if source_text[h.start_index : h.end_index] != h.text:
            raise ValidationError(
                f"span [{h.start_index}, {h.end_index}) does not match its declared text {h.text!r}"
            )
        # Sorted by start, so any overlap shows up against the furthest end seen so far
        if h.start_index < furthest_end:
            raise OverlapError(
                f"span [{h.start_index}, {h.end_index}) overlaps a span ending at {furthest_end}"
            )
        furthest_end = max(furthest_end, h.end_index)


def build_segments(
    source_text: str, highlights: Sequence[HighlightedSegment]
) -> list[Segment]:
    """
    Return segments covering *source_text* end to end, in order.

    Highlights are ordered by ``start_index``; ``sorted`` is stable, so
    spans sharing a start keep their input order (and are then rejected as
    overlapping).  Highlighted segments carry the highlight's own text.
    """
    ordered = sorted(highlights, key=lambda h: h.start_index)
    _validate(source_text, ordered)

    segments: list[Segment] = []
    cursor = 0
    for h in ordered:
        if h.start_index > cursor:
            segments.append(Segment(source_text[cursor : h.start_index]))
        segments.append(Segment(h.text, h))
        cursor = h.end_index

    if cursor < len(source_text):
        segments.append(Segment(source_text[cursor:]))

    return segments


def segment_risk(segment: Segment) -> RiskLevel | None:
    """Risk level of the segment's highlight confidence, ``None`` when plain."""
    if segment.highlight is None:
        return None
    return classify(segment.highlight.confidence)


def annotate(segments: Sequence[Segment]) -> list[dict]:
    """Attach risk level and display tone to each segment."""
    annotated: list[dict] = []
    for seg in segments:
        level = segment_risk(seg)
        annotated.append(
            {
                "text": seg.text,
                "highlight": seg.highlight,
                "risk_level": level,
                "tone": highlight_tone(level) if level is not None else None,
            }
        )
    return annotated
