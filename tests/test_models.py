"""Tests for marketplace data models."""

from datetime import datetime, timezone
import dataclasses

import pytest

from tutoring_platform.models import (
    Assignment,
    AssignmentStatus,
    Bid,
    Payment,
    PlatformAnalytics,
    User,
    UserRole,
    split_amount,
)


# ── Users ─────────────────────────────────────────────────────────────────

class TestUser:
    def test_roles(self):
        assert User(role=UserRole.STUDENT).is_student
        assert User(role=UserRole.TUTOR).is_tutor
        assert User(role=UserRole.ADMIN).is_admin

    def test_immutable(self):
        user = User(name="Alice")
        with pytest.raises(dataclasses.FrozenInstanceError):
            user.name = "Mallory"

    def test_dict_roundtrip(self):
        user = User(id="1", name="Alice", email="a@test.com", role=UserRole.TUTOR)
        data = user.to_dict()
        assert data["role"] == "tutor"
        assert User.from_dict(data) == user

    def test_generated_ids_unique(self):
        assert User().id != User().id


# ── Assignment status ─────────────────────────────────────────────────────

class TestAssignmentStatus:
    def test_display_labels(self):
        assert AssignmentStatus.BIDDING.value == "Open for Bids"
        assert AssignmentStatus.IN_PROGRESS.value == "In Progress"

    @pytest.mark.parametrize("status,expected", [
        (AssignmentStatus.PENDING, False),
        (AssignmentStatus.BIDDING, False),
        (AssignmentStatus.IN_PROGRESS, True),
        (AssignmentStatus.SUBMITTED, True),
        (AssignmentStatus.COMPLETED, True),
        (AssignmentStatus.DISPUTED, True),
    ])
    def test_has_tutor(self, status, expected):
        assert status.has_tutor is expected

    def test_submission_statuses(self):
        with_submission = {s for s in AssignmentStatus if s.has_submission}
        assert with_submission == {
            AssignmentStatus.SUBMITTED, AssignmentStatus.COMPLETED, AssignmentStatus.DISPUTED,
        }

    def test_active_and_terminal_disjoint(self):
        for status in AssignmentStatus:
            assert not (status.is_active and status.is_terminal)


# ── Assignment ────────────────────────────────────────────────────────────

class TestAssignment:
    def test_defaults(self):
        a = Assignment(title="Essay")
        assert a.id.startswith("ASG-")
        assert a.status == AssignmentStatus.BIDDING
        assert a.tutor_id is None
        assert a.is_open_for_bids

    def test_transition_helpers(self):
        a = Assignment(title="Essay", budget=80)
        a.assign_tutor("t1", "Bob")
        assert a.status == AssignmentStatus.IN_PROGRESS
        assert a.has_tutor

        a.mark_submitted("essay.pdf")
        assert a.status == AssignmentStatus.SUBMITTED
        assert a.submitted_file_url == "essay.pdf"

        a.mark_completed()
        assert a.status == AssignmentStatus.COMPLETED
        assert a.submitted_file_url == "essay.pdf"

    def test_reassigning_clears_submission(self):
        a = Assignment(title="Essay", budget=80)
        a.assign_tutor("t1", "Bob")
        a.mark_submitted("draft.pdf")

        a.assign_tutor("t2", "Diana")
        assert a.status == AssignmentStatus.IN_PROGRESS
        assert a.tutor_id == "t2"
        assert a.submitted_file_url is None

    def test_dict_roundtrip(self):
        created = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        a = Assignment(id="a1", title="Essay", student_id="s1", student_name="Alice",
                       budget=75.5, deadline="2026-02-01", status=AssignmentStatus.SUBMITTED,
                       tutor_id="t1", tutor_name="Bob", submitted_file_url="x.pdf",
                       created_at=created)
        data = a.to_dict()
        assert data["status"] == "Submitted"
        restored = Assignment.from_dict(data)
        assert restored == a
        assert restored.created_at == created


# ── Bids ──────────────────────────────────────────────────────────────────

class TestBid:
    def test_immutable(self):
        bid = Bid(assignment_id="a1", tutor_id="t1", amount=45)
        with pytest.raises(dataclasses.FrozenInstanceError):
            bid.amount = 10

    def test_dict_roundtrip(self):
        bid = Bid(assignment_id="a1", tutor_id="t1", tutor_name="Bob", amount=45.0,
                  proposal="Hire me")
        assert Bid.from_dict(bid.to_dict()) == bid


# ── Payments ──────────────────────────────────────────────────────────────

class TestSplitAmount:
    def test_ten_percent(self):
        assert split_amount(100, 10.0) == (10.0, 90.0)

    def test_rounds_to_cents(self):
        fee, payout = split_amount(33.33, 10.0)
        assert fee == 3.33
        assert payout == 30.0

    def test_half_cent_rounds_up(self):
        fee, payout = split_amount(0.25, 10.0)
        assert fee == 0.03
        assert payout == 0.22

    def test_fee_and_payout_sum_to_amount(self):
        for amount in (1, 9.99, 45, 48, 75, 123.45, 999.99):
            fee, payout = split_amount(amount, 10.0)
            assert fee + payout == pytest.approx(amount)

    def test_zero_fee(self):
        assert split_amount(60, 0) == (0.0, 60.0)


class TestPayment:
    def test_for_assignment(self):
        a = Assignment(id="a9", title="Lab Report", student_id="s1", student_name="Alice",
                       tutor_id="t1", tutor_name="Bob", budget=75)
        now = datetime(2026, 5, 1, tzinfo=timezone.utc)
        payment = Payment.for_assignment(a, 10.0, now=now)

        assert payment.id.startswith("PAY-")
        assert payment.assignment_id == "a9"
        assert payment.assignment_title == "Lab Report"
        assert payment.tutor_id == "t1"
        assert payment.amount == 75.0
        assert payment.platform_fee == 7.5
        assert payment.payout == 67.5
        assert payment.created_at == now

    def test_immutable(self):
        payment = Payment(amount=10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            payment.payout = 0

    def test_dict_roundtrip(self):
        payment = Payment(assignment_id="a1", amount=60, platform_fee=6, payout=54)
        assert Payment.from_dict(payment.to_dict()) == payment


class TestPlatformAnalytics:
    def test_to_dict(self):
        analytics = PlatformAnalytics(total_users=3, total_volume=100.0,
                                      recent_payments=[Payment(amount=100)])
        data = analytics.to_dict()
        assert data["total_users"] == 3
        assert data["total_volume"] == 100.0
        assert len(data["recent_payments"]) == 1
