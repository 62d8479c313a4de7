"""Tests for the in-memory and JSON data stores."""

import json

import pytest

from tutoring_platform.errors import NotFoundError, StoreError
from tutoring_platform.models import Assignment, AssignmentStatus, Bid, Payment, User, UserRole
from tutoring_platform.storage import (
    DEMO_USERS,
    InMemoryDataStore,
    JsonDataStore,
    seed_demo_data,
)


@pytest.fixture(params=["memory", "json"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryDataStore()
    return JsonDataStore(tmp_path / "data")


class TestRepositoryContract:
    def test_insert_and_get(self, any_store):
        user = User(id="u1", name="Alice", email="a@test.com")
        any_store.users.insert(user)
        assert any_store.users.get("u1") == user
        assert len(any_store.users) == 1

    def test_get_missing_returns_none(self, any_store):
        assert any_store.assignments.get("nope") is None

    def test_require_missing_raises(self, any_store):
        with pytest.raises(NotFoundError) as exc_info:
            any_store.assignments.require("nope")
        assert exc_info.value.kind == "Assignment"
        assert exc_info.value.entity_id == "nope"

    def test_duplicate_id_rejected(self, any_store):
        any_store.bids.insert(Bid(id="b1", assignment_id="a1", tutor_id="t1", amount=5))
        with pytest.raises(StoreError):
            any_store.bids.insert(Bid(id="b1", assignment_id="a2", tutor_id="t2", amount=9))
        assert len(any_store.bids) == 1

    def test_find_by_predicate(self, any_store):
        for i in range(4):
            any_store.bids.insert(Bid(assignment_id=f"a{i % 2}", tutor_id=f"t{i}", amount=10 + i))
        found = any_store.bids.find(lambda b: b.assignment_id == "a1")
        assert [b.tutor_id for b in found] == ["t1", "t3"]

    def test_update_in_place(self, any_store):
        any_store.assignments.insert(Assignment(id="a1", title="Essay", budget=50))
        a = any_store.assignments.require("a1")
        a.assign_tutor("t1", "Bob")
        any_store.assignments.update(a)

        stored = any_store.assignments.require("a1")
        assert stored.status == AssignmentStatus.IN_PROGRESS
        assert stored.tutor_id == "t1"

    def test_update_missing_raises(self, any_store):
        with pytest.raises(NotFoundError):
            any_store.assignments.update(Assignment(id="ghost"))

    def test_all_in_insertion_order(self, any_store):
        for pid in ("p3", "p1", "p2"):
            any_store.payments.insert(Payment(id=pid, amount=10))
        assert [p.id for p in any_store.payments.all()] == ["p3", "p1", "p2"]
        assert [p.id for p in any_store.payments] == ["p3", "p1", "p2"]


class TestInMemoryIsolation:
    def test_returned_entities_are_copies(self):
        store = InMemoryDataStore()
        store.assignments.insert(Assignment(id="a1", title="Essay"))

        fetched = store.assignments.require("a1")
        fetched.assign_tutor("t1", "Bob")

        assert store.assignments.require("a1").status == AssignmentStatus.BIDDING


class TestJsonDataStore:
    def test_creates_collection_files(self, tmp_path):
        JsonDataStore(tmp_path)
        for name in ("users", "assignments", "bids", "payments"):
            assert json.loads((tmp_path / f"{name}.json").read_text()) == []

    def test_persists_across_instances(self, tmp_path):
        JsonDataStore(tmp_path).users.insert(
            User(id="u1", name="Alice", email="a@test.com", role=UserRole.TUTOR)
        )
        reopened = JsonDataStore(tmp_path)
        assert reopened.users.require("u1").role == UserRole.TUTOR


class TestSeedDemoData:
    def test_loads_fixtures(self):
        store = InMemoryDataStore()
        inserted = seed_demo_data(store)

        assert inserted == 12
        assert len(store.users) == len(DEMO_USERS) == 5
        assert store.assignments.require("a3").status == AssignmentStatus.SUBMITTED
        assert store.payments.require("p1").payout == 54.0

    def test_idempotent(self):
        store = InMemoryDataStore()
        seed_demo_data(store)
        assert seed_demo_data(store) == 0
        assert len(store.assignments) == 4

    def test_fixtures_respect_tutor_invariant(self):
        store = InMemoryDataStore()
        seed_demo_data(store)
        for a in store.assignments.all():
            assert bool(a.tutor_id) == a.status.has_tutor
