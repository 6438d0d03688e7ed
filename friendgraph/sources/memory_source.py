"""In-memory store — mutable students, friendships and group memberships."""

from __future__ import annotations

from friendgraph.logger import logger
from friendgraph.model import GroupId, Student, StudentId
from friendgraph.sources.source_protocol import SourceState


class InMemorySource:
    """Mutable store implementing the SocialSource protocol.

    Every read returns a fresh copy, so a snapshot built from it is never
    affected by later mutations.
    """

    def __init__(self) -> None:
        self._students: dict[StudentId, Student] = {}
        self._friends: set[frozenset[StudentId]] = set()
        self._members: dict[StudentId, set[GroupId]] = {}

    # -- reads --------------------------------------------------------------

    def friend_edges(self) -> set[tuple[StudentId, StudentId]]:
        return {(max(pair), min(pair)) for pair in self._friends}

    def group_memberships(self) -> dict[StudentId, set[GroupId]]:
        return {sid: set(groups) for sid, groups in self._members.items()}

    def student_ids(self) -> set[StudentId]:
        return set(self._students)

    def read_all(self) -> SourceState:
        return SourceState(
            edges=self.friend_edges(),
            memberships=self.group_memberships(),
            students=self.student_ids(),
        )

    def student_exists(self, student_id: StudentId) -> bool:
        return student_id in self._students

    def get_student(self, student_id: StudentId) -> Student | None:
        return self._students.get(student_id)

    # -- mutations ----------------------------------------------------------

    def add_student(self, student: Student) -> None:
        """Register a student; a student with a faculty joins that faculty's group."""
        if student.id in self._students:
            raise ValueError(f"Student {student.id} already exists")
        self._students[student.id] = student
        groups = self._members.setdefault(student.id, set())
        if student.faculty:
            groups.add(student.faculty)

    def remove_student(self, student_id: StudentId) -> None:
        """Delete a student along with its friendships and memberships."""
        self._require(student_id)
        del self._students[student_id]
        self._members.pop(student_id, None)
        dropped = {pair for pair in self._friends if student_id in pair}
        self._friends -= dropped
        logger.debug(
            "Removed student %s (%d friendships dropped)", student_id, len(dropped)
        )

    def add_friendship(self, a: StudentId, b: StudentId) -> None:
        if a == b:
            raise ValueError(f"Student {a} cannot befriend itself")
        self._require(a)
        self._require(b)
        self._friends.add(frozenset((a, b)))

    def remove_friendship(self, a: StudentId, b: StudentId) -> None:
        pair = frozenset((a, b))
        if pair not in self._friends:
            raise KeyError(f"Students {a} and {b} are not friends")
        self._friends.discard(pair)

    def join_group(self, student_id: StudentId, group: GroupId) -> None:
        self._require(student_id)
        self._members.setdefault(student_id, set()).add(group)

    def leave_group(self, student_id: StudentId, group: GroupId) -> None:
        groups = self._members.get(student_id, set())
        if group not in groups:
            raise KeyError(f"Student {student_id} is not a member of {group!r}")
        groups.discard(group)

    def _require(self, student_id: StudentId) -> None:
        if student_id not in self._students:
            raise KeyError(f"Student {student_id} does not exist")
