from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid {name}: {raw!r} is not a number") from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid {name}: {raw!r} is not an integer") from e


def _focus_class(raw: str | None) -> int | str:
    if raw is None or not raw.strip():
        return 2
    raw = raw.strip()
    # Digits select by position in the prediction list, anything else by className.
    return int(raw) if raw.isdigit() else raw


@dataclass(frozen=True)
class Config:
    # Which prediction is the "focused" pose: list index or className
    focus_class: int | str

    # Threshold policy
    focus_threshold: float
    legacy_rounding: bool

    # Alert sound cooldown
    alert_cooldown_seconds: float

    # Whether a low-focus span still open at stop counts toward the report
    close_open_span_on_stop: bool

    # Driving loop
    target_fps: float

    # Where rendered charts go
    report_dir: str

    # Local HTTP surface
    host: str
    port: int
    base_url: str


def load_config() -> Config:
    host = os.getenv("DRIVEFOCUS_HOST", "127.0.0.1")
    port = _env_int("DRIVEFOCUS_PORT", 8080)

    return Config(
        focus_class=_focus_class(os.getenv("DRIVEFOCUS_FOCUS_CLASS")),
        focus_threshold=_env_float("DRIVEFOCUS_FOCUS_THRESHOLD", 0.90),
        legacy_rounding=_env_bool("DRIVEFOCUS_LEGACY_ROUNDING", False),
        alert_cooldown_seconds=_env_float("DRIVEFOCUS_ALERT_COOLDOWN_SECONDS", 5.0),
        close_open_span_on_stop=_env_bool("DRIVEFOCUS_CLOSE_OPEN_SPAN_ON_STOP", True),
        target_fps=_env_float("DRIVEFOCUS_TARGET_FPS", 30.0),
        report_dir=os.getenv("DRIVEFOCUS_REPORT_DIR", os.path.expanduser("~/.drivefocus/reports")),
        host=host,
        port=port,
        base_url=os.getenv("DRIVEFOCUS_BASE_URL", f"http://{host}:{port}").rstrip("/"),
    )
