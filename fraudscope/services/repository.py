"""
Demo data repository.

Holds the sample analysis, alerts, heat-map observations and headline
stats the dashboard renders.  Analyses produced for uploaded jobs are added
here so the investigation view can look them up by id.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from fraudscope.models import (
    Alert,
    AnalysisMetadata,
    AnalysisResult,
    HeatmapObservation,
    HighlightedSegment,
    ModelVote,
)

DEMO_ANALYSIS_ID = "analysis_demo_001"

SAMPLE_TEXT = """Dear Valued Customer,

We are writing to inform you of an urgent security matter regarding your account. Our advanced fraud detection systems have identified suspicious activity that requires immediate attention.

Your account has been flagged for potential unauthorized access from an unknown location. To protect your assets and personal information, we must verify your identity within the next 24 hours.

Please click the secure link below to verify your account credentials and restore full access:
[SECURE VERIFICATION PORTAL]

Failure to complete this verification process will result in temporary suspension of your account privileges. This is a mandatory security procedure designed to protect our valued customers from financial fraud.

If you have any questions, please contact our 24/7 support team at the number provided in this email. Do not share this email with anyone, as it contains sensitive security information unique to your account.

Thank you for your immediate cooperation in this matter.

Best regards,
Security Team
Financial Services Division"""

SAMPLE_VOTES: tuple[ModelVote, ...] = (
    ModelVote("OpenAI GPT-4 Classifier", 0.78, 1.0),
    ModelVote("Anthropic Claude Detector", 0.82, 1.0),
    ModelVote("Specialized Fraud Detector", 0.93, 1.5),
)

# (flagged phrase, confidence, reason)
_SAMPLE_FLAGS: list[tuple[str, float, str]] = [
    (
        "urgent security matter",
        0.89,
        "High-pressure urgency language commonly used in phishing attempts",
    ),
    (
        "identified suspicious activity that requires immediate attention",
        0.91,
        "Creates false sense of emergency to bypass rational decision-making",
    ),
    (
        "within the next 24 hours",
        0.87,
        "Artificial time pressure typical of social engineering attacks",
    ),
    (
        "click the secure link below to verify your account credentials",
        0.95,
        "Direct request for credential input via external link - classic phishing indicator",
    ),
    (
        "temporary suspension of your account privileges",
        0.88,
        "Threatening language designed to create fear and compliance",
    ),
]

_HEATMAP: list[tuple[str, int, int, float]] = [
    ("Mon", 9, 5, 0.72),
    ("Mon", 10, 8, 0.45),
    ("Mon", 14, 12, 0.88),
    ("Tue", 9, 3, 0.34),
    ("Tue", 11, 15, 0.91),
    ("Tue", 15, 7, 0.56),
    ("Wed", 10, 9, 0.67),
    ("Wed", 13, 11, 0.78),
    ("Wed", 16, 6, 0.42),
    ("Thu", 9, 14, 0.85),
    ("Thu", 12, 10, 0.71),
    ("Thu", 15, 4, 0.38),
    ("Fri", 10, 13, 0.79),
    ("Fri", 14, 8, 0.62),
    ("Fri", 17, 5, 0.47),
]

# (alert id, minutes ago, confidence, status, preview)
_ALERTS: list[tuple[str, int, float, str, str]] = [
    ("alert_001", 15, 0.92, "new",
     "This revolutionary investment opportunity guarantees 300% returns..."),
    ("alert_002", 45, 0.78, "investigating",
     "Dear valued customer, your account has been compromised. Click here..."),
    ("alert_003", 120, 0.85, "new",
     "Congratulations! You have won $1,000,000 in our lottery draw..."),
    ("alert_004", 180, 0.34, "false_positive",
     "Thank you for your recent purchase. Your order will arrive within 3-5..."),
    ("alert_005", 240, 0.91, "resolved",
     "Urgent: Your payment is overdue. Send payment immediately to avoid..."),
]

_STATS: list[dict] = [
    {"title": "Total Scans", "value": "2,847", "change": "+12.5%", "color": "text-blue-500"},
    {"title": "Threats Detected", "value": "143", "change": "+8.2%", "color": "text-red-500"},
    {"title": "False Positives", "value": "28", "change": "-3.1%", "color": "text-emerald-500"},
    {"title": "Avg Analysis Time", "value": "2.4s", "change": "-15.3%", "color": "text-yellow-500"},
]


def locate_highlight(
    source_text: str, phrase: str, confidence: float, reason: str
) -> HighlightedSegment:
    """Build a highlight for the first occurrence of *phrase* in *source_text*."""
    start = source_text.index(phrase)
    return HighlightedSegment(
        text=phrase,
        start_index=start,
        end_index=start + len(phrase),
        confidence=confidence,
        reason=reason,
    )


def sample_highlights() -> tuple[HighlightedSegment, ...]:
    return tuple(
        locate_highlight(SAMPLE_TEXT, phrase, conf, reason)
        for phrase, conf, reason in _SAMPLE_FLAGS
    )


def sample_analysis(analysis_id: str, file_type: str = "text/plain") -> AnalysisResult:
    """The sample phishing analysis, stamped with *analysis_id*."""
    return AnalysisResult(
        id=analysis_id,
        source_text=SAMPLE_TEXT,
        model_votes=SAMPLE_VOTES,
        highlights=sample_highlights(),
        timestamp=datetime.now(timezone.utc),
        metadata=AnalysisMetadata(file_type=file_type, word_count=len(SAMPLE_TEXT.split())),
    )


class DemoRepository:
    def __init__(self, now: datetime | None = None) -> None:
        now = now or datetime.now(timezone.utc)
        self._lock = threading.Lock()
        self._analyses: dict[str, AnalysisResult] = {
            DEMO_ANALYSIS_ID: sample_analysis(DEMO_ANALYSIS_ID)
        }
        self._alerts = [
            Alert(
                id=alert_id,
                timestamp=now - timedelta(minutes=minutes),
                confidence_score=score,
                status=status,
                source_preview=preview,
            )
            for alert_id, minutes, score, status, preview in _ALERTS
        ]
        self._heatmap = [HeatmapObservation(*row) for row in _HEATMAP]

    def get_analysis(self, analysis_id: str) -> AnalysisResult | None:
        with self._lock:
            return self._analyses.get(analysis_id)

    def add_analysis(self, analysis: AnalysisResult) -> None:
        with self._lock:
            self._analyses[analysis.id] = analysis

    def list_alerts(self) -> list[Alert]:
        return list(self._alerts)

    def heatmap_observations(self) -> list[HeatmapObservation]:
        return list(self._heatmap)

    def dashboard_stats(self) -> list[dict]:
        return [dict(s) for s in _STATS]
