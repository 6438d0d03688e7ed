"""Shared test fixtures."""

from pathlib import Path

import pytest

from friendgraph.model import Student
from friendgraph.sources.memory_source import InMemorySource

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture()
def store() -> InMemorySource:
    """Students 1-6 on a friendship path 1-2-3-4-5, 6 not yet connected."""
    source = InMemorySource()
    for sid in range(1, 7):
        source.add_student(Student(id=sid, name=f"student-{sid}"))
    for a, b in [(1, 2), (2, 3), (3, 4), (4, 5)]:
        source.add_friendship(a, b)
    return source
