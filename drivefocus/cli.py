from __future__ import annotations

import json
import time
from dataclasses import asdict
from pathlib import Path

import typer
import uvicorn

from .api import FocusApi
from .chart import render_chart
from .classifier import SimulatedClassifier
from .config import load_config
from .monitor import FocusMonitor
from .summary import headline

app = typer.Typer(
    help="DriveFocus commands (simulate a session, serve the session API, show config).",
    no_args_is_help=True,
)


@app.command("simulate")
def simulate(
    seconds: float = typer.Option(10.0, "--seconds", min=0.0, help="How long to run the simulated session."),
    chart: Path | None = typer.Option(None, "--chart", help="Write the end-of-session doughnut to this PNG."),
    save_chart: bool = typer.Option(False, "--save-chart", help="Write the chart under DRIVEFOCUS_REPORT_DIR."),
    seed: int | None = typer.Option(None, "--seed", help="Seed for the simulated classifier."),
) -> None:
    cfg = load_config()
    monitor = FocusMonitor(cfg)
    monitor.start()
    report = monitor.run(SimulatedClassifier(seed=seed), duration_seconds=seconds)
    assert report is not None

    typer.echo(headline(report))
    typer.echo(
        json.dumps(
            {
                "totalDurationSeconds": round(report.total_duration_seconds, 3),
                "focusedSeconds": round(report.focused_seconds, 3),
                "lowFocusSeconds": round(report.low_focus_seconds, 3),
            },
            indent=2,
        )
    )
    if chart is None and save_chart:
        chart = Path(cfg.report_dir) / f"session-{time.strftime('%Y%m%d-%H%M%S')}.png"
    if chart is not None:
        typer.echo(f"[simulate] Wrote chart: {render_chart(report, chart)}")


@app.command("simulate-remote")
def simulate_remote(
    ticks: int = typer.Option(100, "--ticks", min=1, help="Number of classifications to send."),
    base_url: str | None = typer.Option(None, "--base-url", help="Session API URL (default DRIVEFOCUS_BASE_URL)."),
    seed: int | None = typer.Option(None, "--seed", help="Seed for the simulated classifier."),
) -> None:
    cfg = load_config()
    api = FocusApi(base_url or cfg.base_url)
    classifier = SimulatedClassifier(seed=seed)
    frame_seconds = 1.0 / max(cfg.target_fps, 0.1)

    api.start_session()
    for _ in range(ticks):
        res = api.classify(classifier.predict())
        if res.alerted:
            typer.echo(f"[simulate-remote] {res.message}")
        time.sleep(frame_seconds)
    report = api.stop_session()
    typer.echo(report.headline)
    typer.echo(report.model_dump_json(indent=2))


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind host (default DRIVEFOCUS_HOST)."),
    port: int | None = typer.Option(None, "--port", help="Bind port (default DRIVEFOCUS_PORT)."),
) -> None:
    cfg = load_config()
    uvicorn.run("drivefocus.serve_api:app", host=host or cfg.host, port=port or cfg.port, reload=False)


@app.command("config")
def show_config() -> None:
    typer.echo(json.dumps(asdict(load_config()), indent=2))


def main() -> None:
    app()
