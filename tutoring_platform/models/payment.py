"""Payment model: the ledger entry written when an assignment completes."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import uuid

from .assignment import Assignment

CENTS = Decimal("0.01")


def to_cents(amount) -> Decimal:
    """Quantize an amount to whole cents, rounding half up."""
    return Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)


def split_amount(amount: float, fee_percent: float) -> tuple[float, float]:
    """Split a gross amount into (platform_fee, payout).

    The fee is rounded to cents and the payout is whatever remains, so the two
    always add back up to the gross amount.
    """
    gross = to_cents(amount)
    fee = to_cents(gross * Decimal(str(fee_percent)) / Decimal(100))
    return float(fee), float(gross - fee)


@dataclass(frozen=True)
class Payment:
    """An append-only record of money moving from student to tutor."""

    # Identity
    id: str = field(default_factory=lambda: f"PAY-{uuid.uuid4().hex[:8].upper()}")
    assignment_id: str = ""
    assignment_title: str = ""

    # Parties
    student_id: str = ""
    student_name: str = ""
    tutor_id: str = ""
    tutor_name: str = ""

    # Amount
    amount: float = 0.0        # Gross, equal to the assignment budget
    platform_fee: float = 0.0
    payout: float = 0.0        # Amount received by the tutor

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def for_assignment(
        cls,
        assignment: Assignment,
        fee_percent: float = 10.0,
        now: Optional[datetime] = None,
    ) -> "Payment":
        """Build the payment for a completed assignment."""
        platform_fee, payout = split_amount(assignment.budget, fee_percent)
        return cls(
            assignment_id=assignment.id,
            assignment_title=assignment.title,
            student_id=assignment.student_id,
            student_name=assignment.student_name,
            tutor_id=assignment.tutor_id or "",
            tutor_name=assignment.tutor_name or "",
            amount=float(to_cents(assignment.budget)),
            platform_fee=platform_fee,
            payout=payout,
            created_at=now or datetime.now(timezone.utc),
        )

    def to_dict(self) -> dict:
        """Serialize payment to dictionary."""
        return {
            "id": self.id,
            "assignment_id": self.assignment_id,
            "assignment_title": self.assignment_title,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "tutor_id": self.tutor_id,
            "tutor_name": self.tutor_name,
            "amount": self.amount,
            "platform_fee": self.platform_fee,
            "payout": self.payout,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Payment":
        """Deserialize payment from dictionary."""
        kwargs = {
            "id": data.get("id", f"PAY-{uuid.uuid4().hex[:8].upper()}"),
            "assignment_id": data.get("assignment_id", ""),
            "assignment_title": data.get("assignment_title", ""),
            "student_id": data.get("student_id", ""),
            "student_name": data.get("student_name", ""),
            "tutor_id": data.get("tutor_id", ""),
            "tutor_name": data.get("tutor_name", ""),
            "amount": data.get("amount", 0.0),
            "platform_fee": data.get("platform_fee", 0.0),
            "payout": data.get("payout", 0.0),
        }
        if data.get("created_at"):
            kwargs["created_at"] = datetime.fromisoformat(data["created_at"])
        return cls(**kwargs)


@dataclass
class PlatformAnalytics:
    """Aggregate platform metrics for administrators."""

    total_users: int = 0
    student_count: int = 0
    tutor_count: int = 0
    admin_count: int = 0
    completed_jobs: int = 0
    total_volume: float = 0.0
    platform_revenue: float = 0.0
    recent_payments: list[Payment] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize analytics to dictionary."""
        return {
            "total_users": self.total_users,
            "student_count": self.student_count,
            "tutor_count": self.tutor_count,
            "admin_count": self.admin_count,
            "completed_jobs": self.completed_jobs,
            "total_volume": self.total_volume,
            "platform_revenue": self.platform_revenue,
            "recent_payments": [p.to_dict() for p in self.recent_payments],
        }
