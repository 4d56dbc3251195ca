from __future__ import annotations

import pytest

from drivefocus.session import FocusReport
from drivefocus.summary import chart_data, focus_percent, format_duration, headline, report_to_payload


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0.4, "0seconds"),
        (59.9, "59seconds"),
        (60, "1minutes"),
        (3599, "59minutes"),
        (3600, "1hours"),
        (7300, "2hours"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_headline():
    assert headline(FocusReport(total_duration_seconds=125.0, low_focus_seconds=5.0)) == "You drove for 2minutes."


def test_chart_data_floors_seconds():
    report = FocusReport(total_duration_seconds=10.0, low_focus_seconds=3.7)
    data = chart_data(report)

    assert data["labels"] == ["focus time", "low focus time"]
    assert data["datasets"][0]["data"] == [6, 3]


def test_payload_fields_add_up():
    report = FocusReport(total_duration_seconds=1.0, low_focus_seconds=0.7)
    payload = report_to_payload(report, started_at=0.0, ended_at=1.0)

    assert payload["totalDurationSeconds"] == 1.0
    assert payload["lowFocusSeconds"] == pytest.approx(0.7)
    assert payload["focusedSeconds"] == pytest.approx(0.3)
    assert payload["focusPercent"] == pytest.approx(30.0)
    assert payload["headline"] == "You drove for 1seconds."


def test_focus_percent_of_empty_session_is_zero():
    assert focus_percent(FocusReport(total_duration_seconds=0.0, low_focus_seconds=0.0)) == 0.0
