"""
Errors raised by the scoring core.

All of them signal malformed input rather than a transient failure, so
callers should never retry.  The HTTP layer maps every ``ScoringError`` to a
422 response using its ``code``.
"""

from __future__ import annotations


class ScoringError(ValueError):
    code = "scoring_error"


class InvalidInputError(ScoringError):
    """Vote set is empty or its weights sum to zero."""

    code = "invalid_input"


class ValidationError(ScoringError):
    """Highlight text disagrees with the source slice at its offsets."""

    code = "text_mismatch"


class OverlapError(ScoringError):
    code = "overlap"


class RangeError(ScoringError):
    """Highlight offsets fall outside the source text or are inverted."""

    code = "out_of_range"
