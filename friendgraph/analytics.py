"""Query entry points — snapshot, compute, discard on every call."""

from __future__ import annotations

from typing import TYPE_CHECKING

from friendgraph.graph import degrees_of_separation
from friendgraph.logger import logger
from friendgraph.model import DEFAULT_SEPARATION_THRESHOLD, FriendGraphConfig
from friendgraph.recommend import recommend
from friendgraph.separation import pairs_at_least
from friendgraph.snapshot import take_snapshot
from friendgraph.sources.source_protocol import CollaboratorError

if TYPE_CHECKING:
    import threading

    from friendgraph.model import DistancePair, Student, StudentId
    from friendgraph.snapshot import GraphSnapshot
    from friendgraph.sources.source_protocol import SocialSource


class SocialAnalytics:
    """Friendship-graph queries over a live SocialSource.

    No graph state is kept between calls: each query takes a fresh snapshot
    of the source, so mutations made between queries are always reflected.
    A caller that wants several queries to agree can take one snapshot()
    and pass it to each of them.
    """

    def __init__(self, source: SocialSource, config: FriendGraphConfig | None = None) -> None:
        self.source = source
        self.config = config or FriendGraphConfig()

    def snapshot(self) -> GraphSnapshot:
        return take_snapshot(self.source)

    def recommend(
        self, student_id: StudentId, snapshot: GraphSnapshot | None = None
    ) -> list[StudentId]:
        """Ids of friends-of-friends sharing a group with *student_id*.

        Unknown or non-positive ids yield an empty list rather than an error.
        With a *snapshot*, existence is decided by that snapshot alone.
        """
        if student_id <= 0:
            logger.debug("No recommendations for invalid student id %s", student_id)
            return []
        if snapshot is None:
            if not self._exists(student_id):
                logger.debug("No recommendations for unknown student %s", student_id)
                return []
            snapshot = take_snapshot(self.source)
        return recommend(snapshot, student_id, limit=self.config.recommendations.limit)

    def people_you_may_know(
        self, student_id: StudentId, snapshot: GraphSnapshot | None = None
    ) -> list[Student]:
        """Like recommend(), but returns the students' profiles."""
        students: list[Student] = []
        for sid in self.recommend(student_id, snapshot):
            profile = self._profile(sid)
            if profile is None:
                logger.warning("Recommended student %s has no profile, skipping", sid)
                continue
            students.append(profile)
        return students

    def pairs_at_least_5(self) -> set[DistancePair]:
        return self.remotely_connected_pairs(threshold=DEFAULT_SEPARATION_THRESHOLD)

    def remotely_connected_pairs(
        self,
        threshold: int | None = None,
        workers: int | None = None,
        cancel: threading.Event | None = None,
        snapshot: GraphSnapshot | None = None,
    ) -> set[DistancePair]:
        """Connected pairs at least *threshold* hops apart.

        *threshold* and *workers* fall back to the separation config.
        """
        settings = self.config.separation
        if snapshot is None:
            snapshot = take_snapshot(self.source)
        return pairs_at_least(
            snapshot,
            threshold=threshold if threshold is not None else settings.threshold,
            workers=workers if workers is not None else settings.workers,
            cancel=cancel,
        )

    def degrees_of_separation(self, a: StudentId, b: StudentId) -> int | None:
        return degrees_of_separation(take_snapshot(self.source), a, b)

    def _exists(self, student_id: StudentId) -> bool:
        try:
            return self.source.student_exists(student_id)
        except CollaboratorError:
            raise
        except Exception as e:
            raise CollaboratorError(f"Failed to look up student {student_id}: {e}") from e

    def _profile(self, student_id: StudentId) -> Student | None:
        try:
            return self.source.get_student(student_id)
        except CollaboratorError:
            raise
        except Exception as e:
            raise CollaboratorError(f"Failed to load student {student_id}: {e}") from e
