from __future__ import annotations

DEFAULT_COOLDOWN_SECONDS = 5.0


class AlertThrottle:
    """Lets the low-focus alert fire at most once per cooldown window."""

    def __init__(self, cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS):
        self.cooldown_seconds = cooldown_seconds
        self.last_fired_at: float | None = None

    def should_alert(self, now: float) -> bool:
        if self.last_fired_at is None or (now - self.last_fired_at) > self.cooldown_seconds:
            self.last_fired_at = now
            return True
        return False


# There is one alert sound per process, so every monitor shares this throttle.
_default_throttle: AlertThrottle | None = None


def default_throttle(cooldown_seconds: float | None = None) -> AlertThrottle:
    """
    Return the process-wide throttle, creating it on first use.

    The cooldown is fixed by whoever creates it; asking for a different
    cooldown later raises ValueError instead of handing back a throttle that
    silently ignores the request.
    """
    global _default_throttle
    if _default_throttle is None:
        _default_throttle = AlertThrottle(
            cooldown_seconds=DEFAULT_COOLDOWN_SECONDS if cooldown_seconds is None else cooldown_seconds
        )
    elif cooldown_seconds is not None and cooldown_seconds != _default_throttle.cooldown_seconds:
        raise ValueError(
            f"Shared alert throttle already uses a {_default_throttle.cooldown_seconds}s cooldown, "
            f"not {cooldown_seconds}s; pass an AlertThrottle explicitly for a different one"
        )
    return _default_throttle
