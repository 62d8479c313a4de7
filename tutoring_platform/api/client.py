"""Python client for the tutoring marketplace.

``MarketplaceClient`` is the single entry point a UI layer talks to. It binds
a data store, the workflow engine, the query layer and the client session,
and exposes one method per marketplace operation.

Usage:
    client = build_client(load_config())

    client.login("student@test.com", "secret")
    assignment = client.create_assignment(
        title="Calculus Homework",
        subject="Math",
        description="Chapter 5 problems",
        deadline="2026-11-01",
        budget=50,
    )
    bids = client.get_bids_for_assignment(assignment.id)
"""

import logging
from typing import Optional, Union

from ..config import PlatformConfig
from ..errors import UnauthorizedError
from ..models.assignment import Assignment
from ..models.bid import Bid
from ..models.payment import Payment, PlatformAnalytics
from ..models.user import User, UserRole
from ..session import ClientSession, JsonSessionState, MemorySessionState
from ..storage.base import DataStore
from ..storage.json_store import JsonDataStore
from ..storage.memory import InMemoryDataStore
from ..storage.seed import seed_demo_data
from ..workflows.assignment_workflow import AssignmentWorkflow
from ..workflows.queries import AssignmentQueries, TutorWork
from ..workflows.roles import view_for

logger = logging.getLogger(__name__)


class MarketplaceClient:
    """Role-aware facade over the marketplace operations.

    Operations that act on behalf of someone use the session's current user,
    and are refused with UnauthorizedError when that user's role does not
    expose them.
    """

    def __init__(
        self,
        store: DataStore,
        session: Optional[ClientSession] = None,
        config: Optional[PlatformConfig] = None,
    ):
        self.config = config or PlatformConfig(storage="memory")
        self.store = store
        self.session = session or ClientSession(store)
        self.workflow = AssignmentWorkflow(
            store,
            fee_percent=self.config.platform_fee_percent,
            strict_bid_acceptance=self.config.strict_bid_acceptance,
        )
        self.queries = AssignmentQueries(store, self.config.recent_payments_limit)

    def _actor(self, operation: str) -> User:
        """The current user, checked against the role's exposed operations."""
        user = self.session.require_user()
        if not view_for(user.role).permits(operation):
            raise UnauthorizedError(f"A {user.role.value} may not {operation.replace('_', ' ')}")
        return user

    # === Session ===

    @property
    def current_user(self) -> Optional[User]:
        return self.session.current_user

    def login(self, email: str, password: str) -> Optional[User]:
        return self.session.login(email, password)

    def register(self, name: str, email: str, password: str, role: UserRole) -> User:
        return self.session.register(name, email, password, role)

    def logout(self) -> None:
        self.session.logout()

    # === Assignments ===

    def create_assignment(
        self,
        title: str,
        subject: str,
        description: str,
        deadline: str,
        budget: float,
        file_url: Optional[str] = None,
    ) -> Assignment:
        student = self._actor("create_assignment")
        return self.workflow.create_assignment(
            student, title, subject, description, deadline, budget, file_url
        )

    def get_assignments(self) -> list[Assignment]:
        """The assignment list for the current user's role."""
        user = self._actor("get_assignments")
        return view_for(user.role).assignments(self.queries, user)

    def get_assignment(self, assignment_id: str) -> Assignment:
        self.session.require_user()
        return self.store.assignments.require(assignment_id)

    def get_bids_for_assignment(self, assignment_id: str) -> list[Bid]:
        self._actor("get_bids_for_assignment")
        return self.queries.bids_for_assignment(assignment_id)

    def accept_bid(self, assignment_id: str, bid: Union[Bid, str]) -> Assignment:
        student = self._actor("accept_bid")
        return self.workflow.accept_bid(student, assignment_id, bid)

    def complete_assignment(self, assignment_id: str) -> Assignment:
        student = self._actor("complete_assignment")
        return self.workflow.complete_assignment(student, assignment_id)

    # === Tutor work ===

    def create_bid(self, assignment_id: str, amount: float, proposal: str) -> Bid:
        tutor = self._actor("create_bid")
        return self.workflow.place_bid(tutor, assignment_id, amount, proposal)

    def submit_work(self, assignment_id: str, file_name: str) -> Assignment:
        tutor = self._actor("submit_work")
        return self.workflow.submit_work(tutor, assignment_id, file_name)

    def get_tutor_assignments(self, tutor_id: Optional[str] = None) -> TutorWork:
        """Active and completed work for a tutor, by default the current one."""
        tutor = self._actor("get_tutor_assignments")
        if tutor_id is not None and tutor_id != tutor.id:
            raise UnauthorizedError("Tutors may only view their own work")
        return self.queries.tutor_work(tutor.id)

    def get_tutor_payments(self) -> list[Payment]:
        tutor = self._actor("get_tutor_payments")
        return self.queries.payments_for_tutor(tutor.id)

    # === Administration ===

    def get_all_users(self) -> list[User]:
        self._actor("get_all_users")
        return self.queries.all_users()

    def get_all_assignments(self) -> list[Assignment]:
        self._actor("get_all_assignments")
        return self.queries.all_assignments()

    def get_platform_analytics(self) -> PlatformAnalytics:
        self._actor("get_platform_analytics")
        return self.queries.platform_analytics()


def build_store(config: PlatformConfig) -> DataStore:
    """Create the configured data store, seeding demo data if asked to."""
    if config.storage == "memory":
        store: DataStore = InMemoryDataStore()
    else:
        store = JsonDataStore(config.data_dir)

    if config.seed_demo_data:
        seed_demo_data(store)
    return store


def build_client(config: PlatformConfig, store: Optional[DataStore] = None) -> MarketplaceClient:
    """Wire a client from configuration."""
    store = store if store is not None else build_store(config)
    if config.storage == "memory":
        state = MemorySessionState()
    else:
        state = JsonSessionState(config.session_file)
    return MarketplaceClient(store, ClientSession(store, state), config)
