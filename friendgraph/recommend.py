"""People-you-may-know — friends of friends sharing a group."""

from __future__ import annotations

from typing import TYPE_CHECKING

from friendgraph.graph import bfs_from
from friendgraph.logger import logger

if TYPE_CHECKING:
    from friendgraph.model import StudentId
    from friendgraph.snapshot import GraphSnapshot

_FRIEND_OF_FRIEND = 2


def recommend(
    snapshot: GraphSnapshot,
    student: StudentId,
    limit: int | None = None,
) -> list[StudentId]:
    """Students exactly two hops away who share at least one group with *student*.

    Distance 0 (the student) and 1 (direct friends) never qualify, so no
    separate exclusion is needed. Results are ordered by id.
    """
    if student not in snapshot:
        logger.debug("Student %s not in snapshot, no recommendations", student)
        return []

    own_groups = snapshot.groups_of(student)
    if not own_groups:
        return []

    bfs_result = bfs_from(snapshot, student, max_depth=_FRIEND_OF_FRIEND)
    candidates = sorted(
        sid
        for sid in bfs_result.at_distance(_FRIEND_OF_FRIEND)
        if own_groups & snapshot.groups_of(sid)
    )
    if limit is not None:
        candidates = candidates[:limit]
    return candidates
