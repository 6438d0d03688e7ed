"""Shortest-path engine — bounded BFS, shortest_path, degrees_of_separation."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from friendgraph.model import StudentId
    from friendgraph.snapshot import GraphSnapshot


@dataclass
class BfsResult:
    distances: dict[StudentId, int] = field(default_factory=dict)
    parents: dict[StudentId, StudentId] = field(default_factory=dict)

    @property
    def reachable(self) -> set[StudentId]:
        """Vertices reached from the source, excluding the source itself."""
        return {sid for sid, d in self.distances.items() if d > 0}

    def at_distance(self, hops: int) -> list[StudentId]:
        return [sid for sid, d in self.distances.items() if d == hops]


@dataclass
class PathResult:
    path: list[StudentId] = field(default_factory=list)
    hops: int = 0


def bfs_from(
    snapshot: GraphSnapshot,
    source: StudentId,
    max_depth: int | None = None,
) -> BfsResult:
    """BFS from a single student. Returns exact hop distances and parent map.

    Vertices at *max_depth* are not expanded, so anything farther is absent
    from the result even if a longer path exists.
    """
    result = BfsResult()
    if source not in snapshot:
        return result

    result.distances[source] = 0
    queue: deque[StudentId] = deque([source])

    while queue:
        current = queue.popleft()
        depth = result.distances[current]
        if max_depth is not None and depth >= max_depth:
            continue
        for neighbor in snapshot.neighbors(current):
            if neighbor not in result.distances:
                result.distances[neighbor] = depth + 1
                result.parents[neighbor] = current
                queue.append(neighbor)

    return result


def shortest_path(parents: dict[StudentId, StudentId], target_id: StudentId) -> PathResult:
    """Reconstruct the shortest path from BFS start to target using parent map."""
    if target_id not in parents:
        return PathResult()

    path: list[StudentId] = [target_id]
    current = target_id
    while current in parents:
        current = parents[current]
        path.append(current)
    path.reverse()

    return PathResult(path=path, hops=len(path) - 1)


def degrees_of_separation(
    snapshot: GraphSnapshot, a: StudentId, b: StudentId
) -> int | None:
    """Shortest-path hop count between two students, None if not connected."""
    if a not in snapshot or b not in snapshot:
        return None
    if a == b:
        return 0
    return bfs_from(snapshot, a).distances.get(b)
