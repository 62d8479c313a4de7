"""Bid model: a tutor's offer to take on an assignment."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid


@dataclass(frozen=True)
class Bid:
    """An immutable offer. Bids are never edited or deleted."""

    id: str = field(default_factory=lambda: f"BID-{uuid.uuid4().hex[:8].upper()}")
    assignment_id: str = ""
    tutor_id: str = ""
    tutor_name: str = ""
    amount: float = 0.0
    proposal: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Serialize bid to dictionary."""
        return {
            "id": self.id,
            "assignment_id": self.assignment_id,
            "tutor_id": self.tutor_id,
            "tutor_name": self.tutor_name,
            "amount": self.amount,
            "proposal": self.proposal,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Bid":
        """Deserialize bid from dictionary."""
        kwargs = {
            "id": data.get("id", f"BID-{uuid.uuid4().hex[:8].upper()}"),
            "assignment_id": data.get("assignment_id", ""),
            "tutor_id": data.get("tutor_id", ""),
            "tutor_name": data.get("tutor_name", ""),
            "amount": data.get("amount", 0.0),
            "proposal": data.get("proposal", ""),
        }
        if data.get("created_at"):
            kwargs["created_at"] = datetime.fromisoformat(data["created_at"])
        return cls(**kwargs)
