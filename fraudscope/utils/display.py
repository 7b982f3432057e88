"""
Display helpers for the dashboard front end.

Maps risk levels to the CSS classes and tones the previewer, alert list and
heat map use, and formats numbers and timestamps for cards.
"""

from __future__ import annotations

from datetime import datetime

from fraudscope.config import HIGHLIGHT_TONES, RISK_BG_COLORS, RISK_COLORS


def risk_color(level: str) -> str:
    return RISK_COLORS[level]


def risk_bg_color(level: str) -> str:
    return RISK_BG_COLORS[level]


def highlight_tone(level: str) -> str:
    """``danger`` for high/critical, ``warning`` for medium, ``safe`` otherwise."""
    return HIGHLIGHT_TONES[level]


def format_timestamp(dt: datetime) -> str:
    """E.g. ``Feb 10, 09:05 AM``."""
    return f"{dt:%b} {dt.day}, {dt:%I:%M %p}"


def as_percent(value: float, digits: int = 1) -> str:
    return f"{value * 100:.{digits}f}%"
