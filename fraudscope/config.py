"""
Configuration module for the Fraud Score Review service.

Centralizes risk thresholds, display classes, upload limits,
progress step labels, and logging settings.  A ``.env`` file at the
project root may override the environment-driven values.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(_ROOT / ".env")

# ---------------------------------------------------------------------------
# Risk thresholds (lower-bound inclusive, checked highest first)
# ---------------------------------------------------------------------------
RISK_THRESHOLDS: list[tuple[float, str]] = [
    (0.8, "critical"),
    (0.6, "high"),
    (0.4, "medium"),
    (0.2, "low"),
]

FALLBACK_RISK_LEVEL: str = "safe"

# ---------------------------------------------------------------------------
# Display classes per risk level
# ---------------------------------------------------------------------------
RISK_COLORS: dict[str, str] = {
    "safe": "text-emerald-500",
    "low": "text-green-500",
    "medium": "text-yellow-500",
    "high": "text-orange-500",
    "critical": "text-red-500",
}

RISK_BG_COLORS: dict[str, str] = {
    "safe": "bg-emerald-500/10 border-emerald-500/20",
    "low": "bg-green-500/10 border-green-500/20",
    "medium": "bg-yellow-500/10 border-yellow-500/20",
    "high": "bg-orange-500/10 border-orange-500/20",
    "critical": "bg-red-500/10 border-red-500/20",
}

# Highlight previewer uses a coarser three-tone scheme
HIGHLIGHT_TONES: dict[str, str] = {
    "safe": "safe",
    "low": "safe",
    "medium": "warning",
    "high": "danger",
    "critical": "danger",
}

# ---------------------------------------------------------------------------
# Alert status labels
# ---------------------------------------------------------------------------
ALERT_STATUS_LABELS: dict[str, str] = {
    "new": "New",
    "investigating": "Investigating",
    "resolved": "Resolved",
    "false_positive": "False Positive",
}

# ---------------------------------------------------------------------------
# Heat-map grid
# ---------------------------------------------------------------------------
HEATMAP_DAYS: list[str] = ["Mon", "Tue", "Wed", "Thu", "Fri"]
HEATMAP_HOURS: list[int] = list(range(8, 20))

# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------
ALLOWED_CONTENT_TYPES: set[str] = {
    "text/plain",
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

MAX_UPLOAD_BYTES: int = int(os.getenv("FRAUDSCOPE_MAX_UPLOAD_MB", "10")) * 1024 * 1024

# ---------------------------------------------------------------------------
# Analysis progress steps (progress percentage, label)
# ---------------------------------------------------------------------------
PROGRESS_STEPS: list[tuple[int, str]] = [
    (0, "Preparing upload..."),
    (25, "Uploading document..."),
    (40, "Extracting text content..."),
    (60, "Running AI detection models..."),
    (80, "Calculating composite scores..."),
    (100, "Analysis complete!"),
]

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# "json" for aggregation-friendly output, "console" for local development
LOG_FORMAT: str = os.getenv("LOG_FORMAT", "console").strip().lower()
