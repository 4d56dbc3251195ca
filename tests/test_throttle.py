from __future__ import annotations

import pytest

from drivefocus import throttle as throttle_module
from drivefocus.throttle import AlertThrottle, default_throttle


def test_first_alert_fires_then_waits_out_cooldown():
    throttle = AlertThrottle()
    assert throttle.should_alert(0.0) is True
    assert throttle.should_alert(1.0) is False
    assert throttle.last_fired_at == 0.0
    # The window is strict: exactly 5s later is still inside it.
    assert throttle.should_alert(5.0) is False
    assert throttle.should_alert(5.001) is True
    assert throttle.last_fired_at == 5.001


def test_at_most_one_alert_per_window():
    throttle = AlertThrottle(cooldown_seconds=5.0)
    fired = [t / 100 for t in range(0, 2000) if throttle.should_alert(t / 100)]

    assert fired[0] == 0.0
    for a, b in zip(fired, fired[1:]):
        assert b - a > 5.0


@pytest.fixture
def fresh_default(monkeypatch):
    monkeypatch.setattr(throttle_module, "_default_throttle", None)


def test_default_throttle_is_shared(fresh_default):
    assert default_throttle() is default_throttle()
    assert default_throttle(5.0) is default_throttle()


def test_default_throttle_keeps_creator_cooldown(fresh_default):
    shared = default_throttle(2.0)

    assert shared.cooldown_seconds == 2.0
    assert default_throttle() is shared
    assert default_throttle(2.0) is shared


def test_default_throttle_rejects_conflicting_cooldown(fresh_default):
    default_throttle(5.0)
    with pytest.raises(ValueError, match="5.0s cooldown"):
        default_throttle(1.0)
    assert default_throttle().cooldown_seconds == 5.0
