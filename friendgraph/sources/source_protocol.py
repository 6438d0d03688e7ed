"""Source protocol and registry for the student/friendship/membership store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from friendgraph.model import GroupId, Student, StudentId


class CollaboratorError(Exception):
    """Raised when the underlying store could not be read."""


@dataclass(frozen=True)
class SourceState:
    """Edges, memberships and students captured by one read of the store."""

    edges: set[tuple[StudentId, StudentId]] = field(default_factory=set)
    memberships: dict[StudentId, set[GroupId]] = field(default_factory=dict)
    students: set[StudentId] = field(default_factory=set)


class SocialSource(Protocol):
    """Read-only view of the store the analytics engine queries."""

    def friend_edges(self) -> set[tuple[StudentId, StudentId]]:
        """All friendships as unordered pairs."""
        ...

    def group_memberships(self) -> dict[StudentId, set[GroupId]]:
        """Mapping of student id to the groups it belongs to."""
        ...

    def student_ids(self) -> set[StudentId]:
        """All known student ids, including students without friends."""
        ...

    def read_all(self) -> SourceState:
        """Edges, memberships and student ids from a single consistent read."""
        ...

    def student_exists(self, student_id: StudentId) -> bool: ...

    def get_student(self, student_id: StudentId) -> Student | None: ...


def _open_json(path: Path) -> SocialSource:
    from friendgraph.sources.json_source import JsonDatasetSource

    return JsonDatasetSource(path)


# Registry of available sources
SOURCES: dict[str, Callable[[Path], SocialSource]] = {
    "json": _open_json,
}


def get_source(kind: str, path: Path) -> SocialSource:
    """Open a source by kind, raise KeyError if the kind is unknown."""
    return SOURCES[kind](path)
