from __future__ import annotations

import threading
from typing import Any

from fastapi import FastAPI, HTTPException

from . import LOG_PREFIX, __version__
from .errors import InvalidInput, PreconditionError
from .models import (
    ClassificationRequest,
    ClassificationResponse,
    FocusReportResponse,
    HealthResponse,
    SessionCommandRequest,
    StartSessionResponse,
)
from .monitor import FocusMonitor
from .session import IDLE, RUNNING
from .summary import report_to_payload

app = FastAPI(title="DriveFocus Session API", version=__version__)
_monitor: FocusMonitor | None = None
# Sync handlers run on a thread pool; the monitor must only see one caller at a time.
_lock = threading.Lock()


class ClientTime:
    """
    Maps client timestamps (milliseconds, e.g. the page's performance.now())
    onto the monitor clock for one session.

    - The first timestamped request of a session pins client time to the
      server clock; later timestamps are offsets from that anchor.
    - A request without a timestamp uses the server clock, but never earlier
      than the latest time already handed out, so stop can't precede the
      last frame.
    """

    def __init__(self) -> None:
        self._anchor: tuple[float, float] | None = None  # (client ms, server seconds)
        self.latest: float | None = None

    def reset(self) -> None:
        self._anchor = None
        self.latest = None

    def resolve(self, timestamp_ms: float | None, server_now: float) -> float:
        if timestamp_ms is None:
            now = server_now if self.latest is None else max(server_now, self.latest)
        else:
            if self._anchor is None:
                self._anchor = (timestamp_ms, server_now)
            client0, server0 = self._anchor
            now = server0 + (timestamp_ms - client0) / 1000.0
        self.latest = now if self.latest is None else max(self.latest, now)
        return now


_client_time = ClientTime()


def _no_sound() -> None:
    # The browser page plays the alert itself when `alerted` comes back true.
    return None


def _ensure_monitor() -> FocusMonitor:
    global _monitor
    if _monitor is None:
        _monitor = FocusMonitor(alert_channel=_no_sound)
    return _monitor


def _report_payload(monitor: FocusMonitor) -> dict[str, Any]:
    finished = monitor.last_session
    assert finished is not None
    return report_to_payload(finished.report, started_at=finished.started_at, ended_at=finished.ended_at)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    monitor = _ensure_monitor()
    with _lock:
        return HealthResponse(ok=True, state=RUNNING if monitor.is_running else IDLE)


@app.post("/session/start", response_model=StartSessionResponse)
def start_session(payload: SessionCommandRequest | None = None) -> StartSessionResponse:
    monitor = _ensure_monitor()
    timestamp_ms = payload.timestampMs if payload is not None else None
    with _lock:
        if monitor.is_running:
            raise HTTPException(status_code=409, detail="Session is already running")
        _client_time.reset()
        try:
            monitor.start(now=_client_time.resolve(timestamp_ms, monitor.now()))
        except PreconditionError as e:
            raise HTTPException(status_code=409, detail=str(e)) from e
        assert monitor.started_at is not None
        return StartSessionResponse(state=RUNNING, startedAt=monitor.started_at)


@app.post("/session/classification", response_model=ClassificationResponse)
def classification(payload: ClassificationRequest) -> ClassificationResponse:
    monitor = _ensure_monitor()
    with _lock:
        if not monitor.is_running:
            raise HTTPException(status_code=409, detail="No session is running")
        server_now = monitor.now()
        # Reject bad payloads before the client clock anchor moves.
        try:
            monitor.check_predictions(payload.predictions)
        except InvalidInput as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        result = monitor.tick(
            payload.predictions,
            pose=payload.pose,
            now=_client_time.resolve(payload.timestampMs, server_now),
        )
        assert result is not None
        return ClassificationResponse(
            alertState=result.alert_state,
            focusProbability=round(result.focus_probability, 4),
            alerted=result.alerted,
            message=result.message,
        )


@app.post("/session/stop", response_model=FocusReportResponse)
def stop_session(payload: SessionCommandRequest | None = None) -> FocusReportResponse:
    monitor = _ensure_monitor()
    timestamp_ms = payload.timestampMs if payload is not None else None
    with _lock:
        if not monitor.is_running:
            raise HTTPException(status_code=409, detail="No session is running")
        try:
            monitor.stop(now=_client_time.resolve(timestamp_ms, monitor.now()))
        except PreconditionError as e:
            raise HTTPException(status_code=409, detail=str(e)) from e
        return FocusReportResponse.model_validate(_report_payload(monitor))


@app.get("/session/report", response_model=FocusReportResponse)
def last_report() -> FocusReportResponse:
    monitor = _ensure_monitor()
    with _lock:
        if monitor.last_session is None:
            raise HTTPException(status_code=404, detail="No finished session yet")
        return FocusReportResponse.model_validate(_report_payload(monitor))


@app.on_event("startup")
async def startup_event() -> None:
    _ensure_monitor()
    print(f"{LOG_PREFIX} Session API ready")
