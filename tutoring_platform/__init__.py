"""Tutoring marketplace: students post assignments, tutors bid and deliver."""

from .errors import (
    DuplicateBidError,
    DuplicateEmailError,
    InvalidTransitionError,
    MarketplaceError,
    MissingTutorError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "MarketplaceError",
    "NotFoundError",
    "DuplicateBidError",
    "DuplicateEmailError",
    "ValidationError",
    "MissingTutorError",
    "UnauthorizedError",
    "InvalidTransitionError",
    "StoreError",
]
