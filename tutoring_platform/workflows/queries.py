"""Role-scoped read operations over the data store."""

from decimal import Decimal
from typing import Iterable, NamedTuple, TypeVar

from ..models.assignment import Assignment, AssignmentStatus
from ..models.bid import Bid
from ..models.payment import Payment, PlatformAnalytics, to_cents
from ..models.user import User, UserRole
from ..storage.base import DataStore

T = TypeVar("T")


def newest_first(items: Iterable[T]) -> list[T]:
    """Sort by ``created_at`` descending; ties put later inserts first."""
    return sorted(reversed(list(items)), key=lambda e: e.created_at, reverse=True)


def oldest_first(items: Iterable[T]) -> list[T]:
    """Sort by ``created_at`` ascending; ties keep insertion order."""
    return sorted(items, key=lambda e: e.created_at)


class TutorWork(NamedTuple):
    """A tutor's assignments split by lifecycle stage."""

    active: list[Assignment]
    completed: list[Assignment]


class AssignmentQueries:
    """Read-only views for students, tutors and administrators."""

    # Number of payments shown on the admin dashboard
    RECENT_PAYMENTS_LIMIT = 20

    def __init__(self, store: DataStore, recent_payments_limit: int = RECENT_PAYMENTS_LIMIT):
        self.store = store
        self.recent_payments_limit = recent_payments_limit

    def assignments_for_student(self, student_id: str) -> list[Assignment]:
        """Assignments the student posted, newest first."""
        return newest_first(self.store.assignments.find(lambda a: a.student_id == student_id))

    def open_assignments_for_tutor(self, tutor_id: str) -> list[Assignment]:
        """Assignments open for bids that the tutor has not bid on yet."""
        bid_on = {b.assignment_id for b in self.store.bids.find(lambda b: b.tutor_id == tutor_id)}
        return newest_first(
            self.store.assignments.find(
                lambda a: a.status == AssignmentStatus.BIDDING and a.id not in bid_on
            )
        )

    def bids_for_assignment(self, assignment_id: str) -> list[Bid]:
        """Bids on an assignment in the order they were placed."""
        return oldest_first(self.store.bids.find(lambda b: b.assignment_id == assignment_id))

    def tutor_work(self, tutor_id: str) -> TutorWork:
        """The tutor's assigned work, split into active and completed."""
        assigned = newest_first(self.store.assignments.find(lambda a: a.tutor_id == tutor_id))
        return TutorWork(
            active=[a for a in assigned if a.status.is_active],
            completed=[a for a in assigned if a.status.is_terminal],
        )

    def payments_for_tutor(self, tutor_id: str) -> list[Payment]:
        """Payouts received by the tutor, newest first."""
        return newest_first(self.store.payments.find(lambda p: p.tutor_id == tutor_id))

    def all_users(self) -> list[User]:
        return self.store.users.all()

    def all_assignments(self) -> list[Assignment]:
        return newest_first(self.store.assignments.all())

    def platform_analytics(self) -> PlatformAnalytics:
        """User counts, money volume and recent transactions."""
        users = self.store.users.all()
        payments = self.store.payments.all()

        by_role = {role: 0 for role in UserRole}
        for user in users:
            by_role[user.role] += 1

        total_volume = sum((to_cents(p.amount) for p in payments), Decimal("0"))
        platform_revenue = sum((to_cents(p.platform_fee) for p in payments), Decimal("0"))

        return PlatformAnalytics(
            total_users=len(users),
            student_count=by_role[UserRole.STUDENT],
            tutor_count=by_role[UserRole.TUTOR],
            admin_count=by_role[UserRole.ADMIN],
            completed_jobs=len(payments),
            total_volume=float(total_volume),
            platform_revenue=float(platform_revenue),
            recent_payments=newest_first(payments)[: self.recent_payments_limit],
        )
