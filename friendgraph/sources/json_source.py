"""JSON dataset source — reads students, friendships and groups from a file."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

from friendgraph.logger import logger
from friendgraph.model import GroupId, Student, StudentId
from friendgraph.sources.source_protocol import CollaboratorError, SourceState


class DatasetError(CollaboratorError):
    """Raised when the dataset file is missing, malformed or invalid."""


class Dataset(BaseModel):
    """On-disk layout of a friendgraph dataset."""

    students: list[Student] = Field(default_factory=list)
    friendships: list[tuple[StudentId, StudentId]] = Field(default_factory=list)
    groups: dict[GroupId, list[StudentId]] = Field(default_factory=dict)

    def edges(self) -> set[tuple[StudentId, StudentId]]:
        return {(max(a, b), min(a, b)) for a, b in self.friendships}

    def memberships(self) -> dict[StudentId, set[GroupId]]:
        members: dict[StudentId, set[GroupId]] = {s.id: set() for s in self.students}
        for student in self.students:
            if student.faculty:
                members[student.id].add(student.faculty)
        for group, student_ids in self.groups.items():
            for sid in student_ids:
                members[sid].add(group)
        return members

    def student_ids(self) -> set[StudentId]:
        return {s.id for s in self.students}


class JsonDatasetSource:
    """SocialSource backed by a JSON file.

    The file is re-read on every call so each snapshot reflects the
    current contents on disk. read_all() answers from a single read.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_all(self) -> SourceState:
        data = self._load()
        return SourceState(
            edges=data.edges(),
            memberships=data.memberships(),
            students=data.student_ids(),
        )

    def friend_edges(self) -> set[tuple[StudentId, StudentId]]:
        return self._load().edges()

    def group_memberships(self) -> dict[StudentId, set[GroupId]]:
        return self._load().memberships()

    def student_ids(self) -> set[StudentId]:
        return self._load().student_ids()

    def student_exists(self, student_id: StudentId) -> bool:
        return student_id in self.student_ids()

    def get_student(self, student_id: StudentId) -> Student | None:
        for student in self._load().students:
            if student.id == student_id:
                return student
        return None

    def _load(self) -> Dataset:
        from pathlib import Path as _Path

        p = _Path(str(self.path))
        try:
            text = p.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise DatasetError(f"Dataset file not found: {self.path}") from None
        except OSError as e:
            raise DatasetError(f"Cannot read dataset file {self.path}: {e}") from None
        try:
            raw: object = json.loads(text)
        except json.JSONDecodeError as e:
            raise DatasetError(f"{self.path} is not valid JSON.") from e
        if not isinstance(raw, dict):
            raise DatasetError(f"{self.path} is not a valid dataset (expected JSON object).")
        try:
            data = Dataset.model_validate(raw)
        except ValidationError as e:
            raise DatasetError(f"Invalid dataset in {self.path}: {e}") from e

        self._check_integrity(data)
        logger.debug(
            "Loaded dataset %s: %d students, %d friendships, %d groups",
            self.path,
            len(data.students),
            len(data.friendships),
            len(data.groups),
        )
        return data

    def _check_integrity(self, data: Dataset) -> None:
        self_loops = [pair for pair in data.friendships if pair[0] == pair[1]]
        if self_loops:
            raise DatasetError(
                f"{self.path} lists self-friendships: {sorted(self_loops)}"
            )

        # Friendships and memberships may only name listed students
        known = data.student_ids()
        unknown_friends = {sid for pair in data.friendships for sid in pair} - known
        if unknown_friends:
            raise DatasetError(
                f"{self.path} has friendships with unknown students: "
                f"{sorted(unknown_friends)}"
            )
        for group, student_ids in data.groups.items():
            unknown_members = set(student_ids) - known
            if unknown_members:
                raise DatasetError(
                    f"{self.path} group {group!r} has unknown members: "
                    f"{sorted(unknown_members)}"
                )
