from __future__ import annotations

import pytest

from drivefocus.config import Config
from drivefocus.monitor import FocusMonitor
from drivefocus.throttle import AlertThrottle


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.t = start

    def __call__(self) -> float:
        return self.t

    def sleep(self, seconds: float) -> None:
        self.t += seconds


def make_config(**overrides) -> Config:
    values = dict(
        focus_class=2,
        focus_threshold=0.90,
        legacy_rounding=False,
        alert_cooldown_seconds=5.0,
        close_open_span_on_stop=True,
        target_fps=10.0,
        report_dir="reports",
        host="127.0.0.1",
        port=8080,
        base_url="http://127.0.0.1:8080",
    )
    values.update(overrides)
    return Config(**values)


def predictions(focus_prob: float) -> list[dict]:
    rest = (1.0 - focus_prob) / 2
    return [
        {"className": "looking away", "probability": rest},
        {"className": "phone", "probability": rest},
        {"className": "focused", "probability": focus_prob},
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def alerts() -> list[float]:
    return []


@pytest.fixture
def monitor(clock: FakeClock, alerts: list[float]) -> FocusMonitor:
    return FocusMonitor(
        make_config(),
        throttle=AlertThrottle(cooldown_seconds=5.0),
        alert_channel=lambda: alerts.append(clock()),
        clock=clock,
        sleep=clock.sleep,
    )
