"""Marketplace data models for users, assignments, bids, and payments."""

from .user import User, UserRole
from .assignment import Assignment, AssignmentStatus
from .bid import Bid
from .payment import Payment, PlatformAnalytics, split_amount, to_cents

__all__ = [
    # Users
    "User",
    "UserRole",
    # Assignments
    "Assignment",
    "AssignmentStatus",
    "Bid",
    # Payments
    "Payment",
    "PlatformAnalytics",
    "split_amount",
    "to_cents",
]
