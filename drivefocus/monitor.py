from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from . import LOG_PREFIX
from .classifier import focus_probability, is_focused
from .config import Config, load_config
from .errors import PreconditionError
from .session import LOW_FOCUS, FocusReport, SessionTimer
from .summary import headline
from .throttle import AlertThrottle, default_throttle

FOCUSED_MESSAGE = "you're good"
LOW_FOCUS_MESSAGE = "Hey, stay focus"


class Classifier(Protocol):
    def predict(self) -> Any: ...


@dataclass(frozen=True)
class FinishedSession:
    report: FocusReport
    started_at: float
    ended_at: float


@dataclass(frozen=True)
class TickResult:
    alert_state: str
    focus_probability: float
    alerted: bool
    message: str
    pose: Any = None


def terminal_bell() -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()


class FocusMonitor:
    """
    Wires one session timer, the shared alert throttle and an alert channel
    together. Every tick does one classification, one accumulator update and
    one alert decision; nothing here runs concurrently.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        timer: SessionTimer | None = None,
        throttle: AlertThrottle | None = None,
        alert_channel: Callable[[], None] | None = None,
        render: Callable[[Any], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or load_config()
        self.timer = timer or SessionTimer(close_open_span_on_stop=self.config.close_open_span_on_stop)
        self.throttle = throttle or default_throttle(self.config.alert_cooldown_seconds)
        self.alert_channel = alert_channel or terminal_bell
        self.render = render
        self._clock = clock
        self._sleep = sleep

        self.last_session: FinishedSession | None = None
        self.last_result: TickResult | None = None
        self.started_at: float | None = None
        self.ended_at: float | None = None

    @property
    def last_report(self) -> FocusReport | None:
        return self.last_session.report if self.last_session is not None else None

    @property
    def is_running(self) -> bool:
        return self.timer.is_running

    def now(self) -> float:
        return self._clock()

    def start(self, now: float | None = None) -> None:
        ts = now if now is not None else self._clock()
        self.timer.start_session(ts)
        self.started_at = ts
        self.ended_at = None
        self.last_result = None
        print(f"{LOG_PREFIX} Session START")

    def stop(self, now: float | None = None) -> FocusReport:
        ts = now if now is not None else self._clock()
        report = self.timer.stop_session(ts)
        self.ended_at = ts
        assert self.started_at is not None
        self.last_session = FinishedSession(report=report, started_at=self.started_at, ended_at=ts)
        print(
            f"{LOG_PREFIX} Session STOP: {headline(report)} "
            f"focused={report.focused_seconds:.1f}s low_focus={report.low_focus_seconds:.1f}s"
        )
        return report

    def check_predictions(self, predictions: Any) -> float:
        """Focus probability of a payload; raises InvalidInput without side effects."""
        return focus_probability(predictions, self.config.focus_class)

    def tick(self, predictions: Any, pose: Any = None, now: float | None = None) -> TickResult | None:
        if not self.timer.is_running:
            return None

        # Validate the payload before touching any session state.
        prob = self.check_predictions(predictions)
        focused = is_focused(prob, self.config.focus_threshold, legacy_rounding=self.config.legacy_rounding)

        ts = now if now is not None else self._clock()
        alert_state = self.timer.on_classification(focused, ts)

        alerted = False
        if alert_state == LOW_FOCUS and self.throttle.should_alert(ts):
            alerted = True
            try:
                self.alert_channel()
            except Exception as e:
                print(f"{LOG_PREFIX} Alert channel failed: {e}")

        if self.render is not None:
            try:
                self.render(pose)
            except Exception as e:
                print(f"{LOG_PREFIX} Render failed: {e}")

        result = TickResult(
            alert_state=alert_state,
            focus_probability=prob,
            alerted=alerted,
            message=LOW_FOCUS_MESSAGE if alert_state == LOW_FOCUS else FOCUSED_MESSAGE,
            pose=pose,
        )
        self.last_result = result
        return result

    def run(
        self,
        classifier: Classifier,
        *,
        max_ticks: int | None = None,
        duration_seconds: float | None = None,
    ) -> FocusReport | None:
        """
        Drive ticks at target_fps until the session is stopped elsewhere or a
        tick/duration limit is hit (then the session is stopped here).
        """
        if not self.timer.is_running:
            raise PreconditionError("Start a session before running the monitor loop")

        frame_seconds = 1.0 / max(self.config.target_fps, 0.1)
        loop_start = self._clock()
        ticks = 0
        while True:
            tick_start = self._clock()
            if not self.timer.is_running:
                # Stopped by the UI trigger since the last tick.
                return self.last_report
            if max_ticks is not None and ticks >= max_ticks:
                break
            if duration_seconds is not None and (tick_start - loop_start) >= duration_seconds:
                break

            self.tick(classifier.predict())
            ticks += 1

            elapsed = self._clock() - tick_start
            self._sleep(max(0.0, frame_seconds - elapsed))

        return self.stop()
