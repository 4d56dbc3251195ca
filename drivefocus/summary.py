from __future__ import annotations

import math
from typing import Any

from .session import FocusReport

CHART_LABELS = ["focus time", "low focus time"]
CHART_BACKGROUND = ["rgba(54, 162, 235, 0.2)", "rgba(255, 99, 132, 0.2)"]
CHART_BORDER = ["rgba(54, 162, 235, 1)", "rgba(255, 99, 132, 1)"]


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{math.floor(seconds)}seconds"
    if seconds < 3600:
        return f"{math.floor(seconds / 60)}minutes"
    return f"{math.floor(seconds / 3600)}hours"


def headline(report: FocusReport) -> str:
    return f"You drove for {format_duration(report.total_duration_seconds)}."


def focus_percent(report: FocusReport) -> float:
    total = report.total_duration_seconds
    return round(report.focused_seconds / total * 100.0, 2) if total > 0 else 0.0


def chart_data(report: FocusReport) -> dict[str, Any]:
    """Doughnut dataset handed to the chart renderer (whole seconds, floored)."""
    return {
        "labels": list(CHART_LABELS),
        "datasets": [
            {
                "label": "focus",
                "data": [
                    math.floor(max(0.0, report.focused_seconds)),
                    math.floor(report.low_focus_seconds),
                ],
                "backgroundColor": list(CHART_BACKGROUND),
                "borderColor": list(CHART_BORDER),
                "borderWidth": 1,
            }
        ],
    }


def report_to_payload(report: FocusReport, *, started_at: float | None = None, ended_at: float | None = None) -> dict[str, Any]:
    return {
        "startedAt": started_at,
        "endedAt": ended_at,
        "totalDurationSeconds": round(report.total_duration_seconds, 3),
        "focusedSeconds": round(report.focused_seconds, 3),
        "lowFocusSeconds": round(report.low_focus_seconds, 3),
        "focusPercent": focus_percent(report),
        "headline": headline(report),
        "chart": chart_data(report),
    }
