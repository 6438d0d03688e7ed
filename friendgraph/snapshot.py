"""Graph snapshot — immutable adjacency and memberships for one query."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from friendgraph.logger import logger
from friendgraph.model import GroupId, SnapshotStats, StudentId
from friendgraph.sources.source_protocol import CollaboratorError

if TYPE_CHECKING:
    from friendgraph.sources.source_protocol import SocialSource

_EMPTY_GROUPS: frozenset[GroupId] = frozenset()


@dataclass(frozen=True)
class GraphSnapshot:
    adjacency: Mapping[StudentId, tuple[StudentId, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    memberships: Mapping[StudentId, frozenset[GroupId]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def neighbors(self, student_id: StudentId) -> tuple[StudentId, ...]:
        return self.adjacency.get(student_id, ())

    def groups_of(self, student_id: StudentId) -> frozenset[GroupId]:
        return self.memberships.get(student_id, _EMPTY_GROUPS)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self.adjacency

    def stats(self) -> SnapshotStats:
        degree_sum = sum(len(n) for n in self.adjacency.values())
        groups: set[GroupId] = set()
        for member_of in self.memberships.values():
            groups |= member_of
        return SnapshotStats(
            students=len(self.adjacency),
            friendships=degree_sum // 2,
            groups=len(groups),
        )


def build_snapshot(
    edges: Iterable[tuple[StudentId, StudentId]],
    memberships: Mapping[StudentId, Iterable[GroupId]],
    students: Iterable[StudentId] = (),
) -> GraphSnapshot:
    """Build a symmetric adjacency snapshot from friendships and memberships.

    Every student named by an edge, a membership entry or *students* becomes
    a vertex. Self-loops are dropped and duplicate edges collapse.
    """
    neighbors: dict[StudentId, set[StudentId]] = {}
    for sid in students:
        neighbors.setdefault(sid, set())
    for sid in memberships:
        neighbors.setdefault(sid, set())

    for a, b in edges:
        if a == b:
            logger.warning("Dropping self-friendship of student %s", a)
            continue
        neighbors.setdefault(a, set()).add(b)
        neighbors.setdefault(b, set()).add(a)

    # Sorted neighbor tuples keep BFS traversal order deterministic
    adjacency = {sid: tuple(sorted(adj)) for sid, adj in neighbors.items()}
    groups = {sid: frozenset(g) for sid, g in memberships.items()}

    snapshot = GraphSnapshot(
        adjacency=MappingProxyType(adjacency),
        memberships=MappingProxyType(groups),
    )
    logger.debug(
        "Built snapshot: %d students, %d friendships",
        len(adjacency),
        snapshot.stats().friendships,
    )
    return snapshot


def take_snapshot(source: SocialSource) -> GraphSnapshot:
    """Read the source in one consistent pass and build a snapshot.

    Any failure while reading is raised as CollaboratorError so callers can
    tell a failed load from an empty result.
    """
    try:
        state = source.read_all()
    except CollaboratorError:
        raise
    except Exception as e:
        raise CollaboratorError(f"Failed to read social data: {e}") from e
    return build_snapshot(state.edges, state.memberships, state.students)
