"""Repository interfaces for the marketplace data store.

Workflows and queries depend on these protocols only, so the in-memory store
used in tests and the JSON store used by the CLI are interchangeable, and a
database-backed store can be dropped in without touching callers.
"""

from typing import Callable, Iterator, Optional, Protocol, TypeVar

from ..models.assignment import Assignment
from ..models.bid import Bid
from ..models.payment import Payment
from ..models.user import User

T = TypeVar("T")


class Repository(Protocol[T]):
    """Protocol for one collection of entities keyed by ``id``."""

    def insert(self, entity: T) -> T:
        """Add a new entity. Raises StoreError if the id is taken."""
        ...

    def get(self, entity_id: str) -> Optional[T]:
        """Get an entity by ID, or None."""
        ...

    def require(self, entity_id: str) -> T:
        """Get an entity by ID. Raises NotFoundError on a miss."""
        ...

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        """All entities matching the predicate, in insertion order."""
        ...

    def update(self, entity: T) -> T:
        """Replace a stored entity. Raises NotFoundError if absent."""
        ...

    def all(self) -> list[T]:
        """All entities, in insertion order."""
        ...

    def __len__(self) -> int:
        ...

    def __iter__(self) -> Iterator[T]:
        ...


class DataStore(Protocol):
    """The four collections the marketplace runs on."""

    users: Repository[User]
    assignments: Repository[Assignment]
    bids: Repository[Bid]
    payments: Repository[Payment]
