"""Client session: who is logged in, plus persisted client preferences.

Session state is a small key-value store under two well-known keys, ``user``
and ``theme``, so a restarted client picks up where it left off.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from .errors import DuplicateEmailError, UnauthorizedError, ValidationError
from .models.user import User, UserRole
from .storage.base import DataStore
from .workflows.roles import view_for

logger = logging.getLogger(__name__)

USER_KEY = "user"
THEME_KEY = "theme"

THEMES = ("light", "dark")


class SessionState(Protocol):
    """Persisted client key-value state."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemorySessionState:
    """Session state that is lost when the process exits."""

    def __init__(self):
        self._values: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonSessionState:
    """Session state kept in a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            return json.load(f)

    def _save(self, values: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(values, f, indent=2)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._save(values)

    def remove(self, key: str) -> None:
        values = self._load()
        if key in values:
            del values[key]
            self._save(values)


class ClientSession:
    """Tracks the authenticated user.

    Passwords are accepted but never checked: there is no real
    authentication here, only identification by email.
    """

    def __init__(self, store: DataStore, state: Optional[SessionState] = None):
        self.store = store
        self.state = state if state is not None else MemorySessionState()
        self._user: Optional[User] = self._restore_user()

    def _restore_user(self) -> Optional[User]:
        raw = self.state.get(USER_KEY)
        if not raw:
            return None
        user = User.from_dict(json.loads(raw))
        # Drop a stale session whose user is gone from the store
        if self.store.users.get(user.id) is None:
            logger.info("Discarding session for unknown user %s", user.id)
            self.state.remove(USER_KEY)
            return None
        return user

    def _set_user(self, user: Optional[User]) -> None:
        self._user = user
        if user is None:
            self.state.remove(USER_KEY)
        else:
            self.state.set(USER_KEY, json.dumps(user.to_dict()))

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def require_user(self) -> User:
        """The logged-in user. Raises UnauthorizedError if there is none."""
        if self._user is None:
            raise UnauthorizedError("Not logged in")
        return self._user

    def login(self, email: str, password: str) -> Optional[User]:
        """Log in by email. Returns None if no account matches."""
        matches = self.store.users.find(lambda u: u.email == email)
        if not matches:
            logger.info("Login failed for %s", email)
            return None
        self._set_user(matches[0])
        logger.info("User %s logged in", matches[0].id)
        return matches[0]

    def register(self, name: str, email: str, password: str, role: UserRole) -> User:
        """Create an account and log in as it."""
        if not name or not name.strip():
            raise ValidationError("name is required", field="name")
        if not email or not email.strip():
            raise ValidationError("email is required", field="email")

        email = email.strip()
        if self.store.users.find(lambda u: u.email == email):
            raise DuplicateEmailError(email)

        try:
            role = UserRole(role)
        except ValueError as e:
            raise ValidationError(f"Unknown role: {role}", field="role") from e

        user = User(name=name.strip(), email=email, role=role)
        self.store.users.insert(user)
        self._set_user(user)

        logger.info("Registered %s %s", user.role.value, user.id)
        return user

    def logout(self) -> None:
        self._set_user(None)

    # === Preferences ===

    @property
    def theme(self) -> str:
        theme = self.state.get(THEME_KEY)
        return theme if theme in THEMES else "light"

    def set_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValidationError(f"theme must be one of {', '.join(THEMES)}", field="theme")
        self.state.set(THEME_KEY, theme)
        return theme

    def toggle_theme(self) -> str:
        return self.set_theme("light" if self.theme == "dark" else "dark")

    def permitted_operations(self) -> frozenset[str]:
        """Operations the current user's role exposes."""
        if self._user is None:
            return frozenset()
        return view_for(self._user.role).operations
