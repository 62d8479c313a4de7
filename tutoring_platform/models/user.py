"""User model for students, tutors and administrators."""

from dataclasses import dataclass, field
from enum import Enum
import uuid


class UserRole(Enum):
    """Marketplace roles. The set is closed."""

    STUDENT = "student"
    TUTOR = "tutor"
    ADMIN = "admin"


@dataclass(frozen=True)
class User:
    """A registered marketplace account. Immutable after registration."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    email: str = ""
    role: UserRole = UserRole.STUDENT

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    @property
    def is_tutor(self) -> bool:
        return self.role == UserRole.TUTOR

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict:
        """Serialize user to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Deserialize user from dictionary."""
        return cls(
            id=data.get("id", str(uuid.uuid4())),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=UserRole(data.get("role", "student")),
        )
