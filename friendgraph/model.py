"""Canonical model — students, distance pairs, reports, config."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

StudentId = int
GroupId = str

DEFAULT_SEPARATION_THRESHOLD = 5


class Student(BaseModel):
    id: PositiveInt
    name: str
    faculty: str | None = None


class DistancePair(BaseModel):
    """Unordered student pair in canonical form (larger id first)."""

    model_config = ConfigDict(frozen=True)

    id1: StudentId
    id2: StudentId

    @model_validator(mode="after")
    def _check_canonical(self) -> DistancePair:
        if self.id1 <= self.id2:
            raise ValueError(
                f"DistancePair must have id1 > id2, got ({self.id1}, {self.id2})"
            )
        return self

    @classmethod
    def of(cls, a: StudentId, b: StudentId) -> DistancePair:
        return cls(id1=max(a, b), id2=min(a, b))


class SnapshotStats(BaseModel):
    students: int
    friendships: int
    groups: int


class SeparationSettings(BaseModel):
    threshold: int = Field(default=DEFAULT_SEPARATION_THRESHOLD, ge=1)
    workers: int = Field(default=1, ge=1)


class RecommendationSettings(BaseModel):
    limit: PositiveInt | None = None


class FriendGraphConfig(BaseModel):
    separation: SeparationSettings = Field(default_factory=SeparationSettings)
    recommendations: RecommendationSettings = Field(
        default_factory=RecommendationSettings
    )


class RecommendationReport(BaseModel):
    """Assembled by the CLI after a people-you-may-know query."""

    student_id: StudentId
    candidates: list[Student]
    stats: SnapshotStats


class SeparationReport(BaseModel):
    """Assembled by the CLI after a long-distance pair query."""

    threshold: int
    pairs: list[DistancePair]
    stats: SnapshotStats


class QueryKind(StrEnum):
    RECOMMEND = "recommend"
    REMOTE_PAIRS = "remote-pairs"


class RunMetadata(BaseModel):
    """Sidecar describing which query produced a report and on what data."""

    timestamp_utc: str
    query: QueryKind
    data_path: str
    output_dir: str
    result_count: int
    student_id: StudentId | None = None
    threshold: int | None = None
    workers: int | None = None
