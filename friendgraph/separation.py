"""Remotely connected pairs — all student pairs at least N hops apart."""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from friendgraph.graph import bfs_from
from friendgraph.logger import logger
from friendgraph.model import DEFAULT_SEPARATION_THRESHOLD, DistancePair

if TYPE_CHECKING:
    import threading

    from friendgraph.model import StudentId
    from friendgraph.snapshot import GraphSnapshot


class AnalysisCancelled(Exception):
    """Raised when a pair query is cancelled; partial results are discarded."""


def pairs_at_least(
    snapshot: GraphSnapshot,
    threshold: int = DEFAULT_SEPARATION_THRESHOLD,
    workers: int = 1,
    cancel: threading.Event | None = None,
) -> set[DistancePair]:
    """Every connected pair whose shortest path is at least *threshold* hops.

    Runs one unbounded BFS per student. Students in different components
    have no finite distance and are never paired. With *workers* > 1 the
    per-student BFS runs are spread over a thread pool and merged by union.
    """
    if threshold < 1:
        raise ValueError(f"threshold must be >= 1, got {threshold}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    sources = sorted(snapshot.adjacency)
    if workers == 1 or len(sources) < 2:
        found = _run_sequential(snapshot, sources, threshold, cancel)
    else:
        found = _run_parallel(snapshot, sources, threshold, workers, cancel)

    logger.debug(
        "Found %d pairs at >= %d hops over %d students",
        len(found),
        threshold,
        len(sources),
    )
    return {DistancePair(id1=hi, id2=lo) for hi, lo in found}


def _far_from(
    snapshot: GraphSnapshot,
    source: StudentId,
    threshold: int,
) -> set[tuple[StudentId, StudentId]]:
    # Each pair is found from both ends; keep only the one seen from the larger id
    distances = bfs_from(snapshot, source).distances
    return {
        (source, other)
        for other, hops in distances.items()
        if hops >= threshold and other < source
    }


def _check_cancel(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise AnalysisCancelled("Remote pair query cancelled")


def _run_sequential(
    snapshot: GraphSnapshot,
    sources: list[StudentId],
    threshold: int,
    cancel: threading.Event | None,
) -> set[tuple[StudentId, StudentId]]:
    found: set[tuple[StudentId, StudentId]] = set()
    for source in sources:
        _check_cancel(cancel)
        found |= _far_from(snapshot, source, threshold)
    _check_cancel(cancel)
    return found


def _run_parallel(
    snapshot: GraphSnapshot,
    sources: list[StudentId],
    threshold: int,
    workers: int,
    cancel: threading.Event | None,
) -> set[tuple[StudentId, StudentId]]:
    def task(source: StudentId) -> set[tuple[StudentId, StudentId]]:
        _check_cancel(cancel)
        return _far_from(snapshot, source, threshold)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(task, source) for source in sources]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()
        found: set[tuple[StudentId, StudentId]] = set()
        for future in done:
            found |= future.result()

    _check_cancel(cancel)
    return found
