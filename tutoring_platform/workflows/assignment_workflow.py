"""Assignment lifecycle: posting, bidding, delivery and approval.

Status moves Bidding -> In Progress -> Submitted -> Completed. Each operation
checks every precondition before it touches the store, so a raised error
means nothing was written. Completion writes exactly one Payment.
"""

import logging
from datetime import datetime, timezone
from numbers import Real
from typing import Callable, Optional, Union

from ..errors import (
    DuplicateBidError,
    InvalidTransitionError,
    MissingTutorError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from ..models.assignment import Assignment, AssignmentStatus
from ..models.bid import Bid
from ..models.payment import Payment
from ..models.user import User, UserRole
from ..storage.base import DataStore

logger = logging.getLogger(__name__)


def _require_positive(value, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not value > 0:
        raise ValidationError(f"{field_name} must be a positive number", field=field_name)
    return float(value)


def _require_role(actor: User, role: UserRole, operation: str) -> None:
    if actor.role != role:
        raise UnauthorizedError(f"Only a {role.value} may {operation}")


class AssignmentWorkflow:
    """Enforces assignment state transitions and writes payments."""

    # Platform commission taken from the budget on completion
    PLATFORM_FEE_PERCENT = 10.0

    def __init__(
        self,
        store: DataStore,
        fee_percent: Optional[float] = None,
        strict_bid_acceptance: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.fee_percent = self.PLATFORM_FEE_PERCENT if fee_percent is None else fee_percent
        self.strict_bid_acceptance = strict_bid_acceptance
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _now(self) -> datetime:
        return self._clock()

    # === Create ===

    def create_assignment(
        self,
        student: User,
        title: str,
        subject: str,
        description: str,
        deadline: Union[str, datetime],
        budget: float,
        file_url: Optional[str] = None,
    ) -> Assignment:
        """Post a new assignment, open for bids immediately."""
        _require_role(student, UserRole.STUDENT, "create assignments")
        budget = _require_positive(budget, "budget")

        if isinstance(deadline, datetime):
            deadline = deadline.isoformat()
        if not deadline or not str(deadline).strip():
            raise ValidationError("deadline is required", field="deadline")

        assignment = Assignment(
            title=title,
            subject=subject,
            description=description,
            student_id=student.id,
            student_name=student.name,
            deadline=str(deadline).strip(),
            budget=budget,
            file_url=file_url or None,
            status=AssignmentStatus.BIDDING,
            created_at=self._now(),
        )
        self.store.assignments.insert(assignment)

        logger.info("Assignment %s created by student %s", assignment.id, student.id)
        return assignment

    # === Bidding ===

    def place_bid(
        self,
        tutor: User,
        assignment_id: str,
        amount: float,
        proposal: str,
    ) -> Bid:
        """Place a tutor's bid. A tutor gets one bid per assignment."""
        _require_role(tutor, UserRole.TUTOR, "place bids")
        amount = _require_positive(amount, "amount")

        assignment = self.store.assignments.require(assignment_id)

        already_bid = self.store.bids.find(
            lambda b: b.assignment_id == assignment_id and b.tutor_id == tutor.id
        )
        if already_bid:
            raise DuplicateBidError(assignment_id, tutor.id)

        if not assignment.is_open_for_bids:
            raise InvalidTransitionError(assignment_id, assignment.status.value, "bid on")

        bid = Bid(
            assignment_id=assignment_id,
            tutor_id=tutor.id,
            tutor_name=tutor.name,
            amount=amount,
            proposal=proposal,
            created_at=self._now(),
        )
        self.store.bids.insert(bid)

        logger.info("Tutor %s bid %.2f on assignment %s", tutor.id, amount, assignment_id)
        return bid

    def accept_bid(self, student: User, assignment_id: str, bid: Union[Bid, str]) -> Assignment:
        """Hand the assignment to the bidding tutor.

        Accepting again on an assignment still in progress or awaiting approval
        replaces that tutor and discards any submitted work, unless the workflow
        was built with ``strict_bid_acceptance``, in which case only an
        assignment still open for bids can be accepted. Completed and disputed
        assignments never change hands.
        """
        assignment = self.store.assignments.require(assignment_id)

        if assignment.student_id != student.id:
            raise UnauthorizedError("Only the student who posted the assignment may accept bids")

        bid_id = bid.id if isinstance(bid, Bid) else bid
        stored_bid = self.store.bids.require(bid_id)
        if stored_bid.assignment_id != assignment_id:
            raise ValidationError(
                f"Bid {bid_id} belongs to assignment {stored_bid.assignment_id}", field="bid"
            )

        if assignment.status.is_terminal:
            raise InvalidTransitionError(assignment_id, assignment.status.value, "accept a bid on")

        if not assignment.is_open_for_bids:
            if self.strict_bid_acceptance:
                raise InvalidTransitionError(
                    assignment_id, assignment.status.value, "accept a bid on"
                )
            logger.warning(
                "Re-assigning %s (status %s) from tutor %s to %s",
                assignment_id, assignment.status.value, assignment.tutor_id, stored_bid.tutor_id,
            )

        assignment.assign_tutor(stored_bid.tutor_id, stored_bid.tutor_name)
        self.store.assignments.update(assignment)

        logger.info("Assignment %s accepted bid %s", assignment_id, stored_bid.id)
        return assignment

    # === Delivery ===

    def submit_work(self, tutor: User, assignment_id: str, file_name: str) -> Assignment:
        """Deliver work. Resubmitting before approval replaces the file."""
        assignment = self.store.assignments.require(assignment_id)

        if not file_name or not file_name.strip():
            raise ValidationError("file name is required", field="file_name")

        if not assignment.tutor_id or assignment.tutor_id != tutor.id:
            raise UnauthorizedError("Only the assigned tutor may submit work")

        if assignment.status not in (AssignmentStatus.IN_PROGRESS, AssignmentStatus.SUBMITTED):
            raise InvalidTransitionError(assignment_id, assignment.status.value, "submit work for")

        assignment.mark_submitted(file_name.strip())
        self.store.assignments.update(assignment)

        logger.info("Tutor %s submitted %s for assignment %s", tutor.id, file_name, assignment_id)
        return assignment

    def complete_assignment(self, student: User, assignment_id: str) -> Assignment:
        """Approve submitted work and record the payment."""
        assignment = self.store.assignments.require(assignment_id)

        if assignment.student_id != student.id:
            raise UnauthorizedError("Only the student who posted the assignment may complete it")

        if not assignment.has_tutor:
            raise MissingTutorError(assignment_id)

        if assignment.status != AssignmentStatus.SUBMITTED:
            raise InvalidTransitionError(assignment_id, assignment.status.value, "complete")

        payment = Payment.for_assignment(assignment, self.fee_percent, now=self._now())
        previous = assignment.status
        assignment.mark_completed()
        self.store.assignments.update(assignment)
        try:
            self.store.payments.insert(payment)
        except StoreError:
            assignment.status = previous
            self.store.assignments.update(assignment)
            raise

        logger.info(
            "Assignment %s completed; payment %s (fee %.2f, payout %.2f)",
            assignment_id, payment.id, payment.platform_fee, payment.payout,
        )
        return assignment
