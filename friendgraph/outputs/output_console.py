"""Console output — TTY summary with Rich tables."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console

    from friendgraph.model import RecommendationReport, SeparationReport

_MAX_PAIRS_SHOWN = 20


def render_recommendations(report: RecommendationReport) -> None:
    """Print the people-you-may-know list for one student."""
    try:
        import rich  # noqa: F401

        _render_recommendations_rich(report)
    except ImportError:
        _render_recommendations_plain(report)


def render_pairs(report: SeparationReport) -> None:
    """Print the remotely connected pairs."""
    try:
        import rich  # noqa: F401

        _render_pairs_rich(report)
    except ImportError:
        _render_pairs_plain(report)


def _render_recommendations_rich(report: RecommendationReport) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console()

    if report.candidates:
        table = Table(title=f"People student {report.student_id} may know")
        table.add_column("Id", justify="right", style="bold")
        table.add_column("Name")
        table.add_column("Faculty")
        for student in report.candidates:
            table.add_row(str(student.id), student.name, student.faculty or "-")
        console.print(table)
    else:
        console.print(f"No recommendations for student {report.student_id}.")

    _print_stats_rich(console, report)


def _render_pairs_rich(report: SeparationReport) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console()

    if report.pairs:
        table = Table(title=f"Pairs at least {report.threshold} hops apart")
        table.add_column("Student", justify="right")
        table.add_column("Student", justify="right")
        for pair in report.pairs[:_MAX_PAIRS_SHOWN]:
            table.add_row(str(pair.id1), str(pair.id2))
        console.print(table)
        hidden = len(report.pairs) - _MAX_PAIRS_SHOWN
        if hidden > 0:
            console.print(f"  ... and {hidden} more (see report.json)")
    else:
        console.print(f"No pairs at least {report.threshold} hops apart.")

    _print_stats_rich(console, report)


def _print_stats_rich(
    console: Console, report: RecommendationReport | SeparationReport
) -> None:
    stats = report.stats
    console.print(
        f"\nGraph: [bold]{stats.students}[/bold] students, "
        f"[bold]{stats.friendships}[/bold] friendships, "
        f"[bold]{stats.groups}[/bold] groups"
    )


def _render_recommendations_plain(report: RecommendationReport) -> None:
    print(f"--- People student {report.student_id} may know ---")
    for student in report.candidates:
        print(f"  {student.id}: {student.name} ({student.faculty or '-'})")
    if not report.candidates:
        print("  (none)")
    _print_stats_plain(report)


def _render_pairs_plain(report: SeparationReport) -> None:
    print(f"--- Pairs at least {report.threshold} hops apart ---")
    for pair in report.pairs[:_MAX_PAIRS_SHOWN]:
        print(f"  ({pair.id1}, {pair.id2})")
    if not report.pairs:
        print("  (none)")
    _print_stats_plain(report)


def _print_stats_plain(report: RecommendationReport | SeparationReport) -> None:
    stats = report.stats
    print(
        f"\nGraph: {stats.students} students, {stats.friendships} friendships, "
        f"{stats.groups} groups"
    )
    sys.stdout.flush()
