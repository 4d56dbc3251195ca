from __future__ import annotations

from dataclasses import dataclass

from .errors import PreconditionError

IDLE = "IDLE"
RUNNING = "RUNNING"

FOCUSED = "FOCUSED"
LOW_FOCUS = "LOW_FOCUS"


@dataclass
class SessionClock:
    started_at: float  # monotonic seconds
    ended_at: float | None = None


@dataclass
class LowFocusAccumulator:
    total_low_focus_seconds: float = 0.0
    low_focus_started_at: float | None = None

    def open(self, now: float) -> None:
        if self.low_focus_started_at is None:
            self.low_focus_started_at = now

    def close(self, now: float) -> None:
        if self.low_focus_started_at is None:
            return
        self.total_low_focus_seconds += max(0.0, now - self.low_focus_started_at)
        self.low_focus_started_at = None


@dataclass(frozen=True)
class FocusReport:
    total_duration_seconds: float
    low_focus_seconds: float

    @property
    def focused_seconds(self) -> float:
        return self.total_duration_seconds - self.low_focus_seconds


class SessionTimer:
    """
    Two-state session toggle plus low-focus time bookkeeping.

    - start_session: IDLE -> RUNNING, fresh clock and accumulator.
    - on_classification: opens a low-focus span on the first "not focused"
      frame and closes it on the next "focused" frame.
    - stop_session: RUNNING -> IDLE, returns a FocusReport.

    Commands issued in the wrong state raise PreconditionError and leave the
    timer untouched.
    """

    def __init__(self, close_open_span_on_stop: bool = True):
        self.close_open_span_on_stop = close_open_span_on_stop

        self.state: str = IDLE
        self.clock: SessionClock | None = None
        self._accumulator = LowFocusAccumulator()

    @property
    def is_running(self) -> bool:
        return self.state == RUNNING

    @property
    def total_low_focus_seconds(self) -> float:
        return self._accumulator.total_low_focus_seconds

    @property
    def low_focus_started_at(self) -> float | None:
        return self._accumulator.low_focus_started_at

    def elapsed(self, now: float) -> float:
        if self.clock is None:
            return 0.0
        end = self.clock.ended_at if self.clock.ended_at is not None else now
        return max(0.0, end - self.clock.started_at)

    def start_session(self, now: float) -> None:
        if self.state == RUNNING:
            raise PreconditionError("Session is already running")

        self.clock = SessionClock(started_at=now)
        self._accumulator = LowFocusAccumulator()
        self.state = RUNNING

    def stop_session(self, now: float) -> FocusReport:
        if self.state != RUNNING:
            raise PreconditionError("No session is running")
        assert self.clock is not None

        if self.close_open_span_on_stop:
            self._accumulator.close(now)
        else:
            # Legacy behavior: the trailing span never reaches the total.
            self._accumulator.low_focus_started_at = None

        self.clock.ended_at = now
        self.state = IDLE

        total = max(0.0, now - self.clock.started_at)
        low = min(self._accumulator.total_low_focus_seconds, total)
        return FocusReport(total_duration_seconds=total, low_focus_seconds=low)

    def on_classification(self, is_focused: bool, now: float) -> str | None:
        if self.state != RUNNING:
            return None

        if is_focused:
            self._accumulator.close(now)
            return FOCUSED

        self._accumulator.open(now)
        return LOW_FOCUS
