"""Tests for the in-memory and JSON dataset sources."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from friendgraph.model import Student
from friendgraph.sources.json_source import DatasetError, JsonDatasetSource
from friendgraph.sources.memory_source import InMemorySource
from friendgraph.sources.source_protocol import CollaboratorError, get_source

FIXTURES = Path(__file__).parent.parent / "fixtures"


class TestInMemoryStudents:
    def test_faculty_group_joined(self) -> None:
        source = InMemorySource()
        source.add_student(Student(id=1, name="Alice", faculty="CS"))
        assert source.group_memberships() == {1: {"CS"}}
        assert source.student_exists(1)
        assert source.get_student(1) == Student(id=1, name="Alice", faculty="CS")

    def test_duplicate_student_rejected(self) -> None:
        source = InMemorySource()
        source.add_student(Student(id=1, name="Alice"))
        with pytest.raises(ValueError):
            source.add_student(Student(id=1, name="Again"))

    def test_remove_cascades(self, store: InMemorySource) -> None:
        store.join_group(3, "G1")
        store.remove_student(3)
        assert not store.student_exists(3)
        assert 3 not in store.group_memberships()
        assert all(3 not in edge for edge in store.friend_edges())
        assert (2, 1) in store.friend_edges()

    def test_remove_unknown(self, store: InMemorySource) -> None:
        with pytest.raises(KeyError):
            store.remove_student(99)


class TestInMemoryFriendships:
    def test_edges_canonical(self, store: InMemorySource) -> None:
        assert store.friend_edges() == {(2, 1), (3, 2), (4, 3), (5, 4)}

    def test_symmetric_duplicate_ignored(self, store: InMemorySource) -> None:
        store.add_friendship(2, 1)
        assert len(store.friend_edges()) == 4

    def test_self_friendship_rejected(self, store: InMemorySource) -> None:
        with pytest.raises(ValueError):
            store.add_friendship(1, 1)

    def test_unknown_student_rejected(self, store: InMemorySource) -> None:
        with pytest.raises(KeyError):
            store.add_friendship(1, 99)

    def test_remove_either_orientation(self, store: InMemorySource) -> None:
        store.remove_friendship(2, 1)
        assert (2, 1) not in store.friend_edges()
        with pytest.raises(KeyError):
            store.remove_friendship(1, 2)


class TestInMemoryGroups:
    def test_join_and_leave(self, store: InMemorySource) -> None:
        store.join_group(1, "G1")
        assert store.group_memberships()[1] == {"G1"}
        store.leave_group(1, "G1")
        assert store.group_memberships()[1] == set()

    def test_leave_non_member(self, store: InMemorySource) -> None:
        with pytest.raises(KeyError):
            store.leave_group(1, "G1")

    def test_reads_are_copies(self, store: InMemorySource) -> None:
        store.join_group(1, "G1")
        store.group_memberships()[1].add("G2")
        assert store.group_memberships()[1] == {"G1"}


class TestJsonDataset:
    def test_campus(self) -> None:
        source = JsonDatasetSource(FIXTURES / "campus.json")
        assert (6, 5) in source.friend_edges()
        assert (8, 7) in source.friend_edges()
        assert source.group_memberships()[1] == {"CS", "chess"}
        assert source.group_memberships()[9] == {"Math"}
        assert source.student_ids() == set(range(1, 10))
        assert source.student_exists(4)
        assert not source.student_exists(40)
        student = source.get_student(3)
        assert student is not None
        assert student.name == "Carol"
        assert source.get_student(40) is None

    def test_empty(self) -> None:
        source = JsonDatasetSource(FIXTURES / "empty.json")
        assert source.friend_edges() == set()
        assert source.group_memberships() == {}

    def test_reread_on_each_call(self, tmp_path: Path) -> None:
        data = tmp_path / "data.json"
        data.write_text(json.dumps({"students": [{"id": 1, "name": "A"}]}))
        source = JsonDatasetSource(data)
        assert source.student_ids() == {1}
        data.write_text(
            json.dumps({"students": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]})
        )
        assert source.student_ids() == {1, 2}

    def test_registry(self) -> None:
        source = get_source("json", FIXTURES / "campus.json")
        assert isinstance(source, JsonDatasetSource)

    def test_unknown_kind(self) -> None:
        with pytest.raises(KeyError):
            get_source("postgres", FIXTURES / "campus.json")


class TestJsonDatasetErrors:
    @pytest.mark.parametrize(
        "name",
        [
            "missing.json",
            "malformed.json",
            "not-object.json",
            "self-friend.json",
            "bad-student.json",
            "dangling-friend.json",
            "dangling-member.json",
        ],
    )
    def test_raises_dataset_error(self, name: str) -> None:
        source = JsonDatasetSource(FIXTURES / name)
        with pytest.raises(DatasetError):
            source.friend_edges()

    def test_dataset_error_is_collaborator_error(self) -> None:
        source = JsonDatasetSource(FIXTURES / "missing.json")
        with pytest.raises(CollaboratorError, match="not found"):
            source.student_ids()

    def test_dangling_friendship_names_unknown_ids(self) -> None:
        source = JsonDatasetSource(FIXTURES / "dangling-friend.json")
        with pytest.raises(DatasetError, match=r"unknown students: \[2, 3, 4, 5, 6\]"):
            source.read_all()

    def test_dangling_member_names_group(self) -> None:
        source = JsonDatasetSource(FIXTURES / "dangling-member.json")
        with pytest.raises(DatasetError, match="'chess' has unknown members"):
            source.student_exists(1)


class TestReadAll:
    def test_json_matches_individual_reads(self) -> None:
        source = JsonDatasetSource(FIXTURES / "campus.json")
        state = source.read_all()
        assert state.edges == source.friend_edges()
        assert state.memberships == source.group_memberships()
        assert state.students == source.student_ids()

    def test_memory_returns_copies(self, store: InMemorySource) -> None:
        state = store.read_all()
        store.add_friendship(5, 6)
        store.join_group(1, "G1")
        assert (6, 5) not in state.edges
        assert state.memberships[1] == set()
        assert state.students == {1, 2, 3, 4, 5, 6}
