"""Shared fixtures for marketplace tests."""

from datetime import datetime, timedelta, timezone

import pytest

from tutoring_platform.models.user import User, UserRole
from tutoring_platform.storage.memory import InMemoryDataStore
from tutoring_platform.workflows.assignment_workflow import AssignmentWorkflow
from tutoring_platform.workflows.queries import AssignmentQueries


class TickingClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock():
    return TickingClock(datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return InMemoryDataStore()


@pytest.fixture
def student(store):
    return store.users.insert(User(id="s1", name="Alice Student", email="alice@test.com",
                                   role=UserRole.STUDENT))


@pytest.fixture
def other_student(store):
    return store.users.insert(User(id="s2", name="Eve Student", email="eve@test.com",
                                   role=UserRole.STUDENT))


@pytest.fixture
def tutor(store):
    return store.users.insert(User(id="t1", name="Bob Tutor", email="bob@test.com",
                                   role=UserRole.TUTOR))


@pytest.fixture
def tutor2(store):
    return store.users.insert(User(id="t2", name="Diana Tutor", email="diana@test.com",
                                   role=UserRole.TUTOR))


@pytest.fixture
def admin(store):
    return store.users.insert(User(id="ad1", name="Charlie Admin", email="charlie@test.com",
                                   role=UserRole.ADMIN))


@pytest.fixture
def workflow(store, clock):
    return AssignmentWorkflow(store, clock=clock)


@pytest.fixture
def queries(store):
    return AssignmentQueries(store)


@pytest.fixture
def make_assignment(workflow, student):
    """Create an assignment for ``student`` with sensible defaults."""
    def _make(**overrides):
        fields = {
            "title": "Calculus Homework",
            "subject": "Math",
            "description": "Chapter 5 problems",
            "deadline": "2026-11-01T00:00:00+00:00",
            "budget": 100,
        }
        fields.update(overrides)
        owner = fields.pop("student", student)
        return workflow.create_assignment(owner, **fields)
    return _make
