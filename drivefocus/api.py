from __future__ import annotations

from typing import Any

import requests

from .models import ClassificationResponse, FocusReportResponse, HealthResponse, StartSessionResponse


class FocusApi:
    """Thin client for the session API, e.g. for a headless classifier process."""

    def __init__(self, base_url: str, timeout_seconds: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def health(self) -> HealthResponse:
        r = requests.get(f"{self.base_url}/health", headers=self._headers(), timeout=self.timeout_seconds)
        r.raise_for_status()
        return HealthResponse.model_validate(r.json())

    def start_session(self) -> StartSessionResponse:
        r = requests.post(f"{self.base_url}/session/start", headers=self._headers(), timeout=self.timeout_seconds)
        r.raise_for_status()
        return StartSessionResponse.model_validate(r.json())

    def classify(self, predictions: Any, pose: Any | None = None) -> ClassificationResponse:
        r = requests.post(
            f"{self.base_url}/session/classification",
            json={"predictions": predictions, "pose": pose},
            headers=self._headers(),
            timeout=self.timeout_seconds,
        )
        r.raise_for_status()
        return ClassificationResponse.model_validate(r.json())

    def stop_session(self) -> FocusReportResponse:
        r = requests.post(f"{self.base_url}/session/stop", headers=self._headers(), timeout=self.timeout_seconds)
        r.raise_for_status()
        return FocusReportResponse.model_validate(r.json())

    def last_report(self) -> FocusReportResponse:
        r = requests.get(f"{self.base_url}/session/report", headers=self._headers(), timeout=self.timeout_seconds)
        r.raise_for_status()
        return FocusReportResponse.model_validate(r.json())
