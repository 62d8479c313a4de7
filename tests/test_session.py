"""Tests for the client session and persisted client state."""

import json

import pytest

from tutoring_platform.errors import DuplicateEmailError, UnauthorizedError, ValidationError
from tutoring_platform.models import UserRole
from tutoring_platform.session import (
    THEME_KEY,
    USER_KEY,
    ClientSession,
    JsonSessionState,
    MemorySessionState,
)
from tutoring_platform.storage import InMemoryDataStore, seed_demo_data


@pytest.fixture
def demo_store():
    store = InMemoryDataStore()
    seed_demo_data(store)
    return store


class TestLogin:
    def test_login_by_email(self, demo_store):
        session = ClientSession(demo_store)
        user = session.login("tutor@test.com", "anything")

        assert user.name == "Bob Tutor"
        assert session.current_user == user
        assert session.is_authenticated

    def test_password_not_checked(self, demo_store):
        session = ClientSession(demo_store)
        assert session.login("student@test.com", "") is not None

    def test_unknown_email_returns_none(self, demo_store):
        session = ClientSession(demo_store)
        assert session.login("nobody@test.com", "pw") is None
        assert session.current_user is None

    def test_logout(self, demo_store):
        session = ClientSession(demo_store)
        session.login("admin@test.com", "pw")
        session.logout()
        assert session.current_user is None
        with pytest.raises(UnauthorizedError):
            session.require_user()


class TestRegister:
    def test_creates_and_logs_in(self, demo_store):
        session = ClientSession(demo_store)
        user = session.register("Frank", "frank@test.com", "pw", UserRole.TUTOR)

        assert user.role == UserRole.TUTOR
        assert session.current_user == user
        assert demo_store.users.require(user.id) == user

    def test_accepts_role_value(self, demo_store):
        user = ClientSession(demo_store).register("Gina", "gina@test.com", "pw", "student")
        assert user.role == UserRole.STUDENT

    def test_duplicate_email(self, demo_store):
        session = ClientSession(demo_store)
        before = len(demo_store.users)

        with pytest.raises(DuplicateEmailError):
            session.register("Imposter", "student@test.com", "pw", UserRole.STUDENT)

        assert len(demo_store.users) == before
        assert session.current_user is None

    @pytest.mark.parametrize("name,email,role", [
        ("", "x@test.com", "student"),
        ("X", "  ", "student"),
        ("X", "x@test.com", "janitor"),
    ])
    def test_invalid_input(self, demo_store, name, email, role):
        with pytest.raises(ValidationError):
            ClientSession(demo_store).register(name, email, "pw", role)


class TestPermittedOperations:
    def test_depends_on_role(self, demo_store):
        session = ClientSession(demo_store)
        assert session.permitted_operations() == frozenset()

        session.login("student@test.com", "pw")
        assert "create_assignment" in session.permitted_operations()

        session.login("tutor@test.com", "pw")
        assert "create_bid" in session.permitted_operations()
        assert "create_assignment" not in session.permitted_operations()


class TestPersistedState:
    def test_session_survives_restart(self, demo_store, tmp_path):
        path = tmp_path / "session.json"
        ClientSession(demo_store, JsonSessionState(path)).login("tutor2@test.com", "pw")

        restored = ClientSession(demo_store, JsonSessionState(path))

        assert restored.current_user.name == "Diana Tutor"
        stored = json.loads(path.read_text())
        assert json.loads(stored[USER_KEY])["email"] == "tutor2@test.com"

    def test_logout_clears_persisted_user(self, demo_store, tmp_path):
        path = tmp_path / "session.json"
        session = ClientSession(demo_store, JsonSessionState(path))
        session.login("tutor@test.com", "pw")
        session.logout()

        assert ClientSession(demo_store, JsonSessionState(path)).current_user is None

    def test_stale_user_discarded(self, demo_store):
        state = MemorySessionState()
        state.set(USER_KEY, json.dumps({"id": "ghost", "name": "Ghost", "email": "g@test.com",
                                        "role": "student"}))
        assert ClientSession(demo_store, state).current_user is None
        assert state.get(USER_KEY) is None

    def test_theme_defaults_to_light(self, demo_store):
        assert ClientSession(demo_store).theme == "light"

    def test_toggle_theme_persists(self, demo_store, tmp_path):
        path = tmp_path / "session.json"
        session = ClientSession(demo_store, JsonSessionState(path))
        assert session.toggle_theme() == "dark"

        restored = ClientSession(demo_store, JsonSessionState(path))
        assert restored.theme == "dark"
        assert json.loads(path.read_text())[THEME_KEY] == "dark"
        assert restored.toggle_theme() == "light"

    def test_rejects_unknown_theme(self, demo_store):
        with pytest.raises(ValidationError):
            ClientSession(demo_store).set_theme("sepia")
