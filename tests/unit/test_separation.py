"""Tests for separation.pairs_at_least()."""

from __future__ import annotations

import itertools
import random
import threading

import pytest

from friendgraph.graph import degrees_of_separation
from friendgraph.model import DistancePair
from friendgraph.separation import AnalysisCancelled, pairs_at_least
from friendgraph.snapshot import GraphSnapshot, build_snapshot


def _path(n: int) -> list[tuple[int, int]]:
    return [(i, i + 1) for i in range(1, n)]


def _brute_force(snap: GraphSnapshot, threshold: int) -> set[DistancePair]:
    found: set[DistancePair] = set()
    for a, b in itertools.combinations(sorted(snap.adjacency), 2):
        hops = degrees_of_separation(snap, a, b)
        if hops is not None and hops >= threshold:
            found.add(DistancePair.of(a, b))
    return found


class TestPathScenarios:
    def test_path_of_length_four_is_empty(self) -> None:
        snap = build_snapshot(_path(5), {})
        assert pairs_at_least(snap) == set()

    def test_path_of_length_five(self) -> None:
        snap = build_snapshot(_path(6), {})
        assert pairs_at_least(snap) == {DistancePair(id1=6, id2=1)}

    def test_longer_path(self) -> None:
        snap = build_snapshot(_path(7), {})
        assert pairs_at_least(snap) == {
            DistancePair(id1=6, id2=1),
            DistancePair(id1=7, id2=2),
            DistancePair(id1=7, id2=1),
        }

    def test_custom_threshold(self) -> None:
        snap = build_snapshot(_path(4), {})
        assert pairs_at_least(snap, threshold=3) == {DistancePair(id1=4, id2=1)}


class TestDisconnected:
    def test_disjoint_triangles_empty(self) -> None:
        snap = build_snapshot([(1, 2), (2, 3), (3, 1), (4, 5), (5, 6), (6, 4)], {})
        assert pairs_at_least(snap) == set()

    def test_far_component_pairs_only_within(self) -> None:
        snap = build_snapshot(_path(6) + [(20, 21)], {}, students=[30])
        assert pairs_at_least(snap) == {DistancePair(id1=6, id2=1)}

    def test_threshold_one_never_crosses_components(self) -> None:
        snap = build_snapshot([(1, 2), (3, 4)], {})
        assert pairs_at_least(snap, threshold=1) == {
            DistancePair(id1=2, id2=1),
            DistancePair(id1=4, id2=3),
        }


class TestShortcuts:
    def test_cycle_shortens_distance(self) -> None:
        # Ring of 10: the farthest any pair can be is 5 hops
        ring = _path(10) + [(10, 1)]
        snap = build_snapshot(ring, {})
        pairs = pairs_at_least(snap)
        assert pairs == {DistancePair.of(i, i + 5) for i in range(1, 6)}


class TestEmpty:
    def test_empty_graph(self) -> None:
        assert pairs_at_least(build_snapshot([], {})) == set()

    def test_single_student(self) -> None:
        assert pairs_at_least(build_snapshot([], {}, students=[1])) == set()


class TestCanonicalForm:
    def test_larger_id_first_and_no_mirror(self) -> None:
        rng = random.Random(11)
        students = list(range(1, 41))
        edges = {(a, a + 1) for a in range(1, 40) if rng.random() < 0.9}
        edges |= {(rng.randint(1, 40), rng.randint(1, 40)) for _ in range(5)}
        snap = build_snapshot(edges, {}, students)
        pairs = pairs_at_least(snap)

        for pair in pairs:
            assert pair.id1 > pair.id2
            assert DistancePair.of(pair.id2, pair.id1) == pair
        assert pairs == _brute_force(snap, 5)

    def test_idempotent(self) -> None:
        snap = build_snapshot(_path(9), {})
        assert pairs_at_least(snap) == pairs_at_least(snap)


class TestParallel:
    def test_workers_match_sequential(self) -> None:
        rng = random.Random(3)
        students = list(range(1, 61))
        edges = {(a, b) for a in students for b in students if a < b and rng.random() < 0.04}
        snap = build_snapshot(edges, {}, students)

        sequential = pairs_at_least(snap, workers=1)
        parallel = pairs_at_least(snap, workers=4)
        assert parallel == sequential
        assert sequential == _brute_force(snap, 5)


class TestCancellation:
    def test_cancelled_before_start(self) -> None:
        cancel = threading.Event()
        cancel.set()
        snap = build_snapshot(_path(6), {})
        with pytest.raises(AnalysisCancelled):
            pairs_at_least(snap, cancel=cancel)

    def test_cancelled_parallel(self) -> None:
        cancel = threading.Event()
        cancel.set()
        snap = build_snapshot(_path(12), {})
        with pytest.raises(AnalysisCancelled):
            pairs_at_least(snap, workers=3, cancel=cancel)

    def test_unset_event_completes(self) -> None:
        snap = build_snapshot(_path(6), {})
        assert pairs_at_least(snap, cancel=threading.Event()) == {
            DistancePair(id1=6, id2=1)
        }


class TestInvalidParameters:
    def test_threshold_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="threshold"):
            pairs_at_least(build_snapshot([], {}), threshold=0)

    def test_workers_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="workers"):
            pairs_at_least(build_snapshot([], {}), workers=0)
