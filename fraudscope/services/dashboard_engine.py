"""
Dashboard engine.

Annotates recent alerts with risk levels, aggregates them into status and
risk distributions, and lays heat-map observations onto the weekday/hour
grid.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

import pandas as pd

from fraudscope.config import ALERT_STATUS_LABELS, HEATMAP_DAYS, HEATMAP_HOURS
from fraudscope.models import Alert, HeatmapObservation
from fraudscope.services.risk_classifier import classify
from fraudscope.utils.display import format_timestamp, risk_color


def annotate_alerts(alerts: Sequence[Alert]) -> list[dict]:
    """Return alert dicts, newest first, enriched with risk and status label."""
    annotated: list[dict] = []
    for alert in sorted(alerts, key=lambda a: a.timestamp, reverse=True):
        level = classify(alert.confidence_score)
        annotated.append(
            {
                "id": alert.id,
                "timestamp": alert.timestamp,
                "formatted_time": format_timestamp(alert.timestamp),
                "confidence_score": alert.confidence_score,
                "status": alert.status,
                "status_label": ALERT_STATUS_LABELS.get(alert.status, alert.status),
                "source_preview": alert.source_preview,
                "risk_level": level,
                "risk_color": risk_color(level),
            }
        )
    return annotated


def summarize_alerts(alerts: Sequence[Alert]) -> dict:
    """Alert counts overall, per status, and per risk level."""
    by_status: Counter[str] = Counter()
    by_risk: Counter[str] = Counter()

    for alert in alerts:
        by_status[alert.status] += 1
        by_risk[classify(alert.confidence_score).value] += 1

    return {
        "total": len(alerts),
        "by_status": dict(by_status),
        "by_risk_level": dict(by_risk),
    }


def _empty_cell(day: str, hour: int) -> dict:
    return {"day": day, "hour": hour, "count": 0, "avg_score": None, "risk_level": None}


def build_heatmap(
    observations: Sequence[HeatmapObservation],
    days: Sequence[str] = HEATMAP_DAYS,
    hours: Sequence[int] = HEATMAP_HOURS,
) -> dict:
    """
    Lay *observations* onto the ``days`` x ``hours`` grid.

    Observations landing on the same cell are merged: counts add up and the
    average score is count-weighted.  Observations outside the grid are
    dropped; cells without detections get ``avg_score`` / ``risk_level``
    of ``None``.
    """
    days, hours = list(days), list(hours)

    if not observations:
        cells = [_empty_cell(d, h) for d in days for h in hours]
        return {"days": days, "hours": hours, "cells": cells}

    frame = pd.DataFrame(
        [
            {"day": o.day, "hour": o.hour, "count": o.count, "avg_score": o.avg_score}
            for o in observations
        ]
    )
    frame["weighted"] = frame["count"] * frame["avg_score"]

    grouped = frame.groupby(["day", "hour"]).agg(
        count=("count", "sum"), weighted=("weighted", "sum")
    )
    grid = grouped.reindex(
        pd.MultiIndex.from_product([days, hours], names=["day", "hour"])
    )

    cells: list[dict] = []
    for (day, hour), row in grid.iterrows():
        if pd.isna(row["count"]) or row["count"] == 0:
            cells.append(_empty_cell(day, int(hour)))
            continue
        count = int(row["count"])
        avg = float(row["weighted"]) / count
        cells.append(
            {
                "day": day,
                "hour": int(hour),
                "count": count,
                "avg_score": avg,
                "risk_level": classify(avg),
            }
        )

    return {"days": days, "hours": hours, "cells": cells}
