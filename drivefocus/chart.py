from __future__ import annotations

from pathlib import Path

from matplotlib.axes import Axes
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .session import FocusReport
from .summary import CHART_LABELS, chart_data, headline

# Same blue/red as the dashboard doughnut (fill at 20% alpha, solid border).
_FILL = [(54 / 255, 162 / 255, 235 / 255, 0.2), (255 / 255, 99 / 255, 132 / 255, 0.2)]
_EDGE = [(54 / 255, 162 / 255, 235 / 255, 1.0), (255 / 255, 99 / 255, 132 / 255, 1.0)]


def draw_chart(ax: Axes, report: FocusReport) -> list[int]:
    """Draw the focus / low focus doughnut onto `ax`; returns the plotted values."""
    values = chart_data(report)["datasets"][0]["data"]
    if sum(values) > 0:
        wedges, _ = ax.pie(
            values,
            colors=_FILL,
            startangle=90,
            counterclock=False,
            wedgeprops={"width": 0.5, "linewidth": 1},
        )
        for wedge, edge in zip(wedges, _EDGE):
            wedge.set_edgecolor(edge)
    else:
        # Nothing to show for a sub-second session; keep an empty ring.
        ax.pie([1], colors=[(0.9, 0.9, 0.9, 1.0)], wedgeprops={"width": 0.5})
    ax.set_title(headline(report))
    ax.text(
        0,
        0,
        "\n".join(f"{label}: {v}s" for label, v in zip(CHART_LABELS, values)),
        ha="center",
        va="center",
        fontsize=8,
    )
    ax.set_aspect("equal")
    return values


def render_chart(report: FocusReport, out_path: Path) -> Path:
    """Write the end-of-session doughnut to a PNG."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    # Render through Agg directly so importing this module leaves the pyplot backend alone.
    fig = Figure(figsize=(4.5, 4.5))
    FigureCanvasAgg(fig)
    draw_chart(fig.add_subplot(), report)
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    return out_path
