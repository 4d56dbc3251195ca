from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    ok: bool = True
    state: str


class StartSessionResponse(BaseModel):
    state: str
    startedAt: float = Field(..., description="Monotonic seconds on the server clock")


class SessionCommandRequest(BaseModel):
    # Client clock (e.g. performance.now()) in milliseconds; server clock when omitted
    timestampMs: float | None = None


class ClassificationRequest(BaseModel):
    # Teachable Machine style list, or a className -> probability mapping
    predictions: list[dict[str, Any]] | dict[str, Any] | list[float]
    # Optional opaque pose data, forwarded to the renderer untouched
    pose: Any | None = None
    # Frame timestamp on the client clock, in milliseconds
    timestampMs: float | None = None


class ClassificationResponse(BaseModel):
    alertState: str
    focusProbability: float
    alerted: bool
    message: str


class ChartDataset(BaseModel):
    label: str
    data: list[int]
    backgroundColor: list[str]
    borderColor: list[str]
    borderWidth: int


class ChartData(BaseModel):
    labels: list[str]
    datasets: list[ChartDataset]


class FocusReportResponse(BaseModel):
    startedAt: float | None = None
    endedAt: float | None = None

    totalDurationSeconds: float
    focusedSeconds: float
    lowFocusSeconds: float
    focusPercent: float

    headline: str
    chart: ChartData
