"""Demo fixtures: a small marketplace with work in every stage."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..models.assignment import Assignment, AssignmentStatus
from ..models.bid import Bid
from ..models.payment import Payment
from ..models.user import User, UserRole
from .base import DataStore

logger = logging.getLogger(__name__)


DEMO_USERS = [
    User(id="1", name="Alice Student", email="student@test.com", role=UserRole.STUDENT),
    User(id="2", name="Bob Tutor", email="tutor@test.com", role=UserRole.TUTOR),
    User(id="3", name="Charlie Admin", email="admin@test.com", role=UserRole.ADMIN),
    User(id="4", name="Diana Tutor", email="tutor2@test.com", role=UserRole.TUTOR),
    User(id="5", name="Eve Student", email="student2@test.com", role=UserRole.STUDENT),
]


def _demo_assignments(now: datetime) -> list[Assignment]:
    day = timedelta(days=1)
    return [
        Assignment(
            id="a1", student_id="1", student_name="Alice Student",
            title="Calculus Homework", subject="Math",
            description="Need help with chapter 5 problems on differentiation and "
                        "integration. It is about 10 problems.",
            deadline=(now + 5 * day).isoformat(), budget=50.0,
            status=AssignmentStatus.BIDDING, created_at=now - 2 * day,
        ),
        Assignment(
            id="a2", student_id="1", student_name="Alice Student",
            title="History Essay", subject="History",
            description="A 5-page essay on the causes of World War II. Requires "
                        "research and proper citations.",
            deadline=(now + 10 * day).isoformat(), budget=100.0,
            status=AssignmentStatus.IN_PROGRESS, tutor_id="2", tutor_name="Bob Tutor",
            created_at=now - 5 * day,
        ),
        Assignment(
            id="a3", student_id="1", student_name="Alice Student",
            title="Chemistry Lab Report", subject="Chemistry",
            description="Write up a lab report for the titration experiment. Data "
                        "and instructions attached.",
            deadline=(now + 2 * day).isoformat(), budget=75.0,
            status=AssignmentStatus.SUBMITTED, tutor_id="4", tutor_name="Diana Tutor",
            submitted_file_url="report.pdf", created_at=now - 10 * day,
        ),
        Assignment(
            id="a4", student_id="5", student_name="Eve Student",
            title="Previous Work", subject="Physics",
            description="A presentation on Newtons laws of motion.",
            deadline=(now - day).isoformat(), budget=60.0,
            status=AssignmentStatus.COMPLETED, tutor_id="2", tutor_name="Bob Tutor",
            submitted_file_url="newton.pptx", created_at=now - 20 * day,
        ),
    ]


def _demo_bids(now: datetime) -> list[Bid]:
    return [
        Bid(
            id="b1", assignment_id="a1", tutor_id="2", tutor_name="Bob Tutor", amount=45.0,
            proposal="I have a PhD in Mathematics and can help you with your calculus "
                     "homework easily.",
            created_at=now - timedelta(days=1),
        ),
        Bid(
            id="b2", assignment_id="a1", tutor_id="4", tutor_name="Diana Tutor", amount=48.0,
            proposal="I am an experienced math tutor and can guarantee a high grade.",
            created_at=now - timedelta(hours=12),
        ),
    ]


def seed_demo_data(store: DataStore, now: Optional[datetime] = None) -> int:
    """Load the demo fixtures into ``store``.

    Entities whose id is already present are left alone, so seeding twice is a
    no-op. Returns the number of entities inserted.
    """
    now = now or datetime.now(timezone.utc)
    assignments = _demo_assignments(now)
    completed = assignments[3]
    payments = [
        Payment(
            id="p1", assignment_id=completed.id, assignment_title=completed.title,
            student_id=completed.student_id, student_name=completed.student_name,
            tutor_id="2", tutor_name="Bob Tutor",
            amount=60.0, platform_fee=6.0, payout=54.0,
            created_at=completed.created_at,
        ),
    ]

    inserted = 0
    for repo, entities in (
        (store.users, DEMO_USERS),
        (store.assignments, assignments),
        (store.bids, _demo_bids(now)),
        (store.payments, payments),
    ):
        for entity in entities:
            if repo.get(entity.id) is None:
                repo.insert(entity)
                inserted += 1

    logger.info("Seeded %d demo entities", inserted)
    return inserted
