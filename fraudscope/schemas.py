"""
Pydantic request / response schemas for the ``/api/v1`` endpoints.

Fields are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fraudscope.models import RiskLevel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


# -- Scoring -----------------------------------------------------------------

class ModelVoteSchema(CamelModel):
    model_name: str = Field(..., min_length=1)
    score: float = Field(..., ge=0.0, le=1.0, allow_inf_nan=False)
    weight: float = Field(..., gt=0.0, allow_inf_nan=False)


class ScoreRequest(CamelModel):
    votes: list[ModelVoteSchema]


class ScoreResponse(CamelModel):
    composite_score: float
    risk_level: RiskLevel


class ClassifyRequest(CamelModel):
    score: float = Field(..., allow_inf_nan=False)


class ClassifyResponse(CamelModel):
    score: float
    risk_level: RiskLevel


# -- Segments ----------------------------------------------------------------

class HighlightSchema(CamelModel):
    """Offsets index Unicode code points of the source text, not UTF-16 units."""

    text: str
    start_index: int
    end_index: int
    confidence: float = Field(..., ge=0.0, le=1.0)
    reason: str = ""


class SegmentsRequest(CamelModel):
    source_text: str = Field(..., max_length=1_000_000)
    highlights: list[HighlightSchema] = Field(default_factory=list)


class SegmentSchema(CamelModel):
    text: str
    highlight: HighlightSchema | None = None
    risk_level: RiskLevel | None = None
    tone: str | None = None  # "safe" | "warning" | "danger"


class SegmentsResponse(CamelModel):
    segments: list[SegmentSchema]


# -- Jobs --------------------------------------------------------------------

class UploadResponse(CamelModel):
    job_id: str
    status: str
    message: str
    timestamp: datetime


class AnalysisMetadataSchema(CamelModel):
    file_type: str
    word_count: int


class AnalysisResultSchema(CamelModel):
    id: str
    source_text: str
    composite_score: float
    risk_level: RiskLevel
    model_votes: list[ModelVoteSchema]
    timestamp: datetime
    metadata: AnalysisMetadataSchema
    status: str = "completed"


class JobStatusResponse(CamelModel):
    job_id: str
    status: str
    progress: int
    current_step: str
    result: AnalysisResultSchema | None = None
    error: str | None = None


# -- Investigation -----------------------------------------------------------

class VoteRow(CamelModel):
    model: str
    score: float
    weight: float
    weighted_score: float
    risk_level: RiskLevel
    specialized: bool


class Breakdown(CamelModel):
    composite_score: float
    risk_level: RiskLevel
    model_count: int
    votes: list[VoteRow]


class InvestigationSummary(CamelModel):
    fraud_confidence: str
    risk_label: str
    models_analyzed: int
    suspicious_segments: int
    word_count: int
    file_type: str


class InvestigationResponse(CamelModel):
    id: str
    source_text: str
    timestamp: datetime
    composite_score: float
    risk_level: RiskLevel
    summary: InvestigationSummary
    breakdown: Breakdown
    segments: list[SegmentSchema]
    highlights: list[HighlightSchema]


# -- Dashboard ---------------------------------------------------------------

class AlertSchema(CamelModel):
    id: str
    timestamp: datetime
    formatted_time: str
    confidence_score: float
    status: str
    status_label: str
    source_preview: str
    risk_level: RiskLevel
    risk_color: str


class AlertsResponse(CamelModel):
    alerts: list[AlertSchema]


class AlertSummary(CamelModel):
    total: int
    by_status: dict[str, int]
    by_risk_level: dict[str, int]


class DashboardStat(CamelModel):
    title: str
    value: str
    change: str
    color: str


class DashboardResponse(CamelModel):
    stats: list[DashboardStat]
    alert_summary: AlertSummary


class HeatmapCell(CamelModel):
    day: str
    hour: int
    count: int
    avg_score: float | None = None
    risk_level: RiskLevel | None = None


class HeatmapResponse(CamelModel):
    days: list[str]
    hours: list[int]
    cells: list[HeatmapCell]
