"""Assignment workflow engine, query layer, and role dispatch."""

from .assignment_workflow import AssignmentWorkflow
from .queries import AssignmentQueries, TutorWork, newest_first, oldest_first
from .roles import AdminView, RoleView, StudentView, TutorView, view_for

__all__ = [
    "AssignmentWorkflow",
    "AssignmentQueries",
    "TutorWork",
    "newest_first",
    "oldest_first",
    "RoleView",
    "StudentView",
    "TutorView",
    "AdminView",
    "view_for",
]
