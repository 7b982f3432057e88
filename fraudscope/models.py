"""
Core value types passed between the services.

Everything here is immutable and built per request from caller-supplied
data; the services never hold on to instances between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RiskLevel(str, Enum):
    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Position in the ordering safe < low < medium < high < critical."""
        return _RISK_ORDER.index(self)


_RISK_ORDER = list(RiskLevel)


@dataclass(frozen=True)
class ModelVote:
    model_name: str
    score: float
    weight: float


@dataclass(frozen=True)
class HighlightedSegment:
    text: str
    start_index: int
    end_index: int
    confidence: float
    reason: str = ""


@dataclass(frozen=True)
class Segment:
    """One contiguous run of source text, highlighted or plain."""

    text: str
    highlight: HighlightedSegment | None = None

    @property
    def is_highlighted(self) -> bool:
        return self.highlight is not None


@dataclass(frozen=True)
class AnalysisMetadata:
    file_type: str
    word_count: int


@dataclass(frozen=True)
class AnalysisResult:
    id: str
    source_text: str
    model_votes: tuple[ModelVote, ...]
    highlights: tuple[HighlightedSegment, ...]
    timestamp: datetime
    metadata: AnalysisMetadata


@dataclass(frozen=True)
class AnalysisJob:
    job_id: str
    status: str  # "pending" | "processing" | "completed" | "failed"
    progress: int
    filename: str
    content_type: str
    size: int
    created_at: datetime
    result: AnalysisResult | None = None
    error: str | None = None


@dataclass(frozen=True)
class Alert:
    id: str
    timestamp: datetime
    confidence_score: float
    status: str  # "new" | "investigating" | "resolved" | "false_positive"
    source_preview: str


@dataclass(frozen=True)
class HeatmapObservation:
    day: str
    hour: int
    count: int
    avg_score: float
