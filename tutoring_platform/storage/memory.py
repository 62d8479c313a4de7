"""In-memory data store for tests and local development."""

import copy
import logging
import threading
from typing import Callable, Generic, Iterator, Optional, TypeVar

from ..errors import NotFoundError, StoreError
from ..models.assignment import Assignment
from ..models.bid import Bid
from ..models.payment import Payment
from ..models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    """A dict-backed collection. Each call holds the lock for its duration.

    Entities are copied on the way in and out, so callers never share state
    with the store and must ``update`` to persist a change.
    """

    def __init__(self, kind: str):
        self.kind = kind
        self._items: dict[str, T] = {}
        self._lock = threading.RLock()

    def insert(self, entity: T) -> T:
        with self._lock:
            if entity.id in self._items:
                raise StoreError(f"{self.kind} already exists: {entity.id}")
            self._items[entity.id] = copy.copy(entity)
        logger.debug("Inserted %s %s", self.kind, entity.id)
        return copy.copy(entity)

    def get(self, entity_id: str) -> Optional[T]:
        with self._lock:
            entity = self._items.get(entity_id)
        return copy.copy(entity) if entity is not None else None

    def require(self, entity_id: str) -> T:
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError(self.kind, entity_id)
        return entity

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        with self._lock:
            items = list(self._items.values())
        return [copy.copy(e) for e in items if predicate(e)]

    def update(self, entity: T) -> T:
        with self._lock:
            if entity.id not in self._items:
                raise NotFoundError(self.kind, entity.id)
            self._items[entity.id] = copy.copy(entity)
        return copy.copy(entity)

    def all(self) -> list[T]:
        return self.find(lambda _: True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())


class InMemoryDataStore:
    """Data store whose contents live only as long as the process."""

    def __init__(self):
        self.users: InMemoryRepository[User] = InMemoryRepository("User")
        self.assignments: InMemoryRepository[Assignment] = InMemoryRepository("Assignment")
        self.bids: InMemoryRepository[Bid] = InMemoryRepository("Bid")
        self.payments: InMemoryRepository[Payment] = InMemoryRepository("Payment")
