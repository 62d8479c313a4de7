"""Assignment model and its lifecycle status."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
import uuid


class AssignmentStatus(Enum):
    """Assignment lifecycle status. Values are the labels shown to users."""

    PENDING = "Pending"
    BIDDING = "Open for Bids"
    IN_PROGRESS = "In Progress"
    SUBMITTED = "Submitted"
    COMPLETED = "Completed"
    DISPUTED = "Disputed"     # Only reachable through dispute resolution

    @property
    def has_tutor(self) -> bool:
        """Whether an assignment in this status must carry a tutor."""
        return self in (
            AssignmentStatus.IN_PROGRESS,
            AssignmentStatus.SUBMITTED,
            AssignmentStatus.COMPLETED,
            AssignmentStatus.DISPUTED,
        )

    @property
    def has_submission(self) -> bool:
        """Whether an assignment in this status carries submitted work."""
        return self in (
            AssignmentStatus.SUBMITTED,
            AssignmentStatus.COMPLETED,
            AssignmentStatus.DISPUTED,
        )

    @property
    def is_active(self) -> bool:
        return self in (AssignmentStatus.IN_PROGRESS, AssignmentStatus.SUBMITTED)

    @property
    def is_terminal(self) -> bool:
        return self in (AssignmentStatus.COMPLETED, AssignmentStatus.DISPUTED)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Assignment:
    """A piece of work posted by a student."""

    # Identity
    id: str = field(default_factory=lambda: f"ASG-{uuid.uuid4().hex[:8].upper()}")
    title: str = ""
    subject: str = ""
    description: str = ""

    # Ownership (student name is a snapshot taken at creation)
    student_id: str = ""
    student_name: str = ""

    # Assignment
    tutor_id: Optional[str] = None
    tutor_name: Optional[str] = None

    # Terms
    deadline: str = ""
    budget: float = 0.0

    # Files
    file_url: Optional[str] = None
    submitted_file_url: Optional[str] = None

    status: AssignmentStatus = AssignmentStatus.BIDDING
    created_at: datetime = field(default_factory=_utc_now)

    @property
    def is_open_for_bids(self) -> bool:
        return self.status == AssignmentStatus.BIDDING

    @property
    def has_tutor(self) -> bool:
        return bool(self.tutor_id) and bool(self.tutor_name)

    def assign_tutor(self, tutor_id: str, tutor_name: str) -> None:
        """Hand the assignment to a tutor and start work."""
        self.tutor_id = tutor_id
        self.tutor_name = tutor_name
        self.submitted_file_url = None
        self.status = AssignmentStatus.IN_PROGRESS

    def mark_submitted(self, file_name: str) -> None:
        """Record delivered work."""
        self.submitted_file_url = file_name
        self.status = AssignmentStatus.SUBMITTED

    def mark_completed(self) -> None:
        """Close the assignment after the student approves the work."""
        self.status = AssignmentStatus.COMPLETED

    def to_dict(self) -> dict:
        """Serialize assignment to dictionary."""
        return {
            "id": self.id,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "tutor_id": self.tutor_id,
            "tutor_name": self.tutor_name,
            "title": self.title,
            "subject": self.subject,
            "description": self.description,
            "deadline": self.deadline,
            "budget": self.budget,
            "file_url": self.file_url,
            "submitted_file_url": self.submitted_file_url,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Assignment":
        """Deserialize assignment from dictionary."""
        assignment = cls(
            id=data.get("id", f"ASG-{uuid.uuid4().hex[:8].upper()}"),
            title=data.get("title", ""),
            subject=data.get("subject", ""),
            description=data.get("description", ""),
            student_id=data.get("student_id", ""),
            student_name=data.get("student_name", ""),
            tutor_id=data.get("tutor_id"),
            tutor_name=data.get("tutor_name"),
            deadline=data.get("deadline", ""),
            budget=data.get("budget", 0.0),
            file_url=data.get("file_url"),
            submitted_file_url=data.get("submitted_file_url"),
            status=AssignmentStatus(data.get("status", AssignmentStatus.BIDDING.value)),
        )

        if data.get("created_at"):
            assignment.created_at = datetime.fromisoformat(data["created_at"])

        return assignment
