"""Per-role behaviour for the three marketplace roles.

Each role has one view class that decides what ``get_assignments`` returns
for it and which operations it may call. Callers look the view up with
``view_for`` instead of branching on the role themselves.
"""

from typing import ClassVar

from ..models.assignment import Assignment
from ..models.user import User, UserRole
from .queries import AssignmentQueries


class RoleView:
    """Base class for role handlers."""

    role: ClassVar[UserRole]
    operations: ClassVar[frozenset[str]] = frozenset()

    def assignments(self, queries: AssignmentQueries, user: User) -> list[Assignment]:
        raise NotImplementedError

    def permits(self, operation: str) -> bool:
        return operation in self.operations


class StudentView(RoleView):
    """Students see and manage their own postings."""

    role = UserRole.STUDENT
    operations = frozenset({
        "create_assignment",
        "get_assignments",
        "get_bids_for_assignment",
        "accept_bid",
        "complete_assignment",
    })

    def assignments(self, queries: AssignmentQueries, user: User) -> list[Assignment]:
        return queries.assignments_for_student(user.id)


class TutorView(RoleView):
    """Tutors see work they can still bid on."""

    role = UserRole.TUTOR
    operations = frozenset({
        "get_assignments",
        "create_bid",
        "submit_work",
        "get_tutor_assignments",
        "get_tutor_payments",
    })

    def assignments(self, queries: AssignmentQueries, user: User) -> list[Assignment]:
        return queries.open_assignments_for_tutor(user.id)


class AdminView(RoleView):
    """Administrators see everything and the platform metrics."""

    role = UserRole.ADMIN
    operations = frozenset({
        "get_assignments",
        "get_bids_for_assignment",
        "get_all_users",
        "get_all_assignments",
        "get_platform_analytics",
    })

    def assignments(self, queries: AssignmentQueries, user: User) -> list[Assignment]:
        return queries.all_assignments()


ROLE_VIEWS: dict[UserRole, RoleView] = {
    view.role: view for view in (StudentView(), TutorView(), AdminView())
}


def view_for(role: UserRole) -> RoleView:
    """Get the handler for a role."""
    return ROLE_VIEWS[role]
