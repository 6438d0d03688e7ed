"""CLI entry point and query orchestration."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from friendgraph.analytics import SocialAnalytics
from friendgraph.config import load_config
from friendgraph.model import RecommendationReport, SeparationReport
from friendgraph.outputs.output_console import render_pairs, render_recommendations
from friendgraph.outputs.output_json import render_json
from friendgraph.outputs.output_run_metadata import write_run_metadata
from friendgraph.sources.source_protocol import CollaboratorError, get_source

app = typer.Typer(no_args_is_help=True)

DataOption = Annotated[Path, typer.Option("--data", help="Path to the JSON dataset file")]
ConfigOption = Annotated[
    Path | None, typer.Option("--config", help="Path to friendgraph.yml")
]
OutOption = Annotated[
    Path | None, typer.Option("--out", help="Output directory for report.json")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", help="Enable verbose logging")]


@app.callback(invoke_without_command=True)
def _callback() -> None:
    """friendgraph — friendship-graph analytics."""


def _setup_logging(verbose: bool) -> None:
    if verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG)


def _open(data: Path, config_path: Path | None) -> SocialAnalytics:
    return SocialAnalytics(get_source("json", data), load_config(config_path))


def _write_reports(
    report: RecommendationReport | SeparationReport,
    data: Path,
    out: Path,
    workers: int | None = None,
) -> None:
    try:
        json_path = render_json(report, out)
        typer.echo(f"Wrote report (JSON): {json_path.resolve()}")
    except Exception as e:
        typer.echo(f"Error writing JSON: {e}", err=True)
        raise

    try:
        meta_path = write_run_metadata(report, data, out, workers)
        typer.echo(f"Wrote run metadata (JSON): {meta_path.resolve()}")
    except Exception as e:
        typer.echo(f"Error writing run metadata: {e}", err=True)
        raise


@app.command()
def recommend(
    data: DataOption,
    student: Annotated[int, typer.Option("--student", help="Student id to recommend for")],
    config_path: ConfigOption = None,
    out: OutOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List people a student may know: friends of friends sharing a group."""
    _setup_logging(verbose)
    analytics = _open(data, config_path)

    try:
        snapshot = analytics.snapshot()
        candidates = analytics.people_you_may_know(student, snapshot)
    except CollaboratorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    report = RecommendationReport(
        student_id=student, candidates=candidates, stats=snapshot.stats()
    )
    render_recommendations(report)
    if out is not None:
        _write_reports(report, data, out)


@app.command("remote-pairs")
def remote_pairs(
    data: DataOption,
    threshold: Annotated[
        int | None,
        typer.Option("--threshold", min=1, help="Minimum degrees of separation"),
    ] = None,
    workers: Annotated[
        int | None, typer.Option("--workers", min=1, help="BFS worker threads")
    ] = None,
    config_path: ConfigOption = None,
    out: OutOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List student pairs whose degrees of separation meet the threshold."""
    _setup_logging(verbose)
    analytics = _open(data, config_path)
    settings = analytics.config.separation
    threshold = threshold if threshold is not None else settings.threshold
    workers = workers if workers is not None else settings.workers

    try:
        snapshot = analytics.snapshot()
        pairs = analytics.remotely_connected_pairs(
            threshold=threshold, workers=workers, snapshot=snapshot
        )
    except CollaboratorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    report = SeparationReport(
        threshold=threshold,
        pairs=sorted(pairs, key=lambda p: (p.id1, p.id2)),
        stats=snapshot.stats(),
    )
    render_pairs(report)
    if out is not None:
        _write_reports(report, data, out, workers)


@app.command()
def separation(
    data: DataOption,
    from_id: Annotated[int, typer.Option("--from", help="First student id")],
    to_id: Annotated[int, typer.Option("--to", help="Second student id")],
    verbose: VerboseOption = False,
) -> None:
    """Print the degrees of separation between two students."""
    _setup_logging(verbose)
    analytics = _open(data, None)

    try:
        hops = analytics.degrees_of_separation(from_id, to_id)
    except CollaboratorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    if hops is None:
        typer.echo(f"Students {from_id} and {to_id} are not connected.")
        raise SystemExit(1)
    typer.echo(f"Degrees of separation between {from_id} and {to_id}: {hops}")
