from __future__ import annotations

from pathlib import Path

import pytest
from matplotlib.figure import Figure

from drivefocus.chart import draw_chart, render_chart
from drivefocus.session import FocusReport


def _wedge_spans(ax) -> list[float]:
    return [abs(w.theta2 - w.theta1) for w in ax.patches]


def test_draw_chart_plots_focus_and_low_focus():
    ax = Figure().add_subplot()
    values = draw_chart(ax, FocusReport(total_duration_seconds=90.0, low_focus_seconds=30.0))

    assert values == [60, 30]
    assert ax.get_title() == "You drove for 1minutes."
    assert _wedge_spans(ax) == [pytest.approx(240.0), pytest.approx(120.0)]


def test_draw_chart_empty_session_draws_placeholder_ring():
    ax = Figure().add_subplot()
    values = draw_chart(ax, FocusReport(total_duration_seconds=0.2, low_focus_seconds=0.0))

    assert values == [0, 0]
    assert _wedge_spans(ax) == [pytest.approx(360.0)]


def test_render_chart_writes_png(tmp_path):
    out = render_chart(FocusReport(total_duration_seconds=90.0, low_focus_seconds=30.0), tmp_path / "r" / "chart.png")

    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_chart_module_renders_without_pyplot():
    import drivefocus.chart as chart_module

    assert not hasattr(chart_module, "plt")
    assert "matplotlib.use(" not in Path(chart_module.__file__).read_text(encoding="utf-8")
