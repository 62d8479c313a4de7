"""Error taxonomy for the tutoring marketplace.

Every failure raised by the store, workflow engine, query layer or session is a
``MarketplaceError``. Operations raise before mutating anything, so a caller that
catches one of these can assume the store is unchanged.
"""

from typing import Optional


class MarketplaceError(Exception):
    """Base class for all marketplace errors."""


class NotFoundError(MarketplaceError):
    """A referenced entity does not exist."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")


class DuplicateBidError(MarketplaceError):
    """The tutor already placed a bid on this assignment."""

    def __init__(self, assignment_id: str, tutor_id: str):
        self.assignment_id = assignment_id
        self.tutor_id = tutor_id
        super().__init__("You have already placed a bid on this assignment.")


class DuplicateEmailError(MarketplaceError):
    """A user with this email is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists.")


class ValidationError(MarketplaceError):
    """Malformed input, rejected before any mutation."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class MissingTutorError(MarketplaceError):
    """An assignment reached completion without an assigned tutor."""

    def __init__(self, assignment_id: str):
        self.assignment_id = assignment_id
        super().__init__(f"Assignment has no tutor: {assignment_id}")


class UnauthorizedError(MarketplaceError):
    """The acting user may not perform this operation."""


class InvalidTransitionError(MarketplaceError):
    """The assignment is not in a status that allows this operation."""

    def __init__(self, assignment_id: str, status: str, operation: str):
        self.assignment_id = assignment_id
        self.status = status
        self.operation = operation
        super().__init__(f"Cannot {operation} assignment {assignment_id} in status: {status}")


class StoreError(MarketplaceError):
    """The data store rejected a write."""
