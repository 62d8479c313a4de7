"""JSON file data store.

Each collection lives in ``<data_dir>/<name>.json`` as a list of serialized
entities. Every call loads the file and every write saves it back in full,
which keeps the files the single source of truth between CLI invocations.
There is no file locking: one writer at a time.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Callable, Generic, Iterator, Optional, TypeVar

from ..errors import NotFoundError, StoreError
from ..models.assignment import Assignment
from ..models.bid import Bid
from ..models.payment import Payment
from ..models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonRepository(Generic[T]):
    """A collection persisted to a single JSON file."""

    def __init__(self, path: Path, model: type, kind: str):
        self.path = path
        self.model = model
        self.kind = kind
        self._lock = threading.RLock()
        self._ensure_file()

    def _ensure_file(self) -> None:
        """Ensure the parent directory and file exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._save([])

    def _load(self) -> list[T]:
        """Load all entities from storage."""
        with open(self.path, "r") as f:
            data = json.load(f)
        return [self.model.from_dict(item) for item in data]

    def _save(self, entities: list[T]) -> None:
        """Save all entities to storage."""
        with open(self.path, "w") as f:
            json.dump([e.to_dict() for e in entities], f, indent=2)

    def insert(self, entity: T) -> T:
        with self._lock:
            entities = self._load()
            if any(e.id == entity.id for e in entities):
                raise StoreError(f"{self.kind} already exists: {entity.id}")
            entities.append(entity)
            self._save(entities)
        logger.debug("Inserted %s %s into %s", self.kind, entity.id, self.path.name)
        return entity

    def get(self, entity_id: str) -> Optional[T]:
        with self._lock:
            for entity in self._load():
                if entity.id == entity_id:
                    return entity
        return None

    def require(self, entity_id: str) -> T:
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError(self.kind, entity_id)
        return entity

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        with self._lock:
            return [e for e in self._load() if predicate(e)]

    def update(self, entity: T) -> T:
        with self._lock:
            entities = self._load()
            if not any(e.id == entity.id for e in entities):
                raise NotFoundError(self.kind, entity.id)
            entities = [entity if e.id == entity.id else e for e in entities]
            self._save(entities)
        return entity

    def all(self) -> list[T]:
        with self._lock:
            return self._load()

    def __len__(self) -> int:
        return len(self.all())

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())


class JsonDataStore:
    """Data store persisted under a data directory."""

    def __init__(self, data_dir: Path):
        """Initialize store with data directory."""
        self.data_dir = Path(data_dir)
        self.users: JsonRepository[User] = JsonRepository(
            self.data_dir / "users.json", User, "User"
        )
        self.assignments: JsonRepository[Assignment] = JsonRepository(
            self.data_dir / "assignments.json", Assignment, "Assignment"
        )
        self.bids: JsonRepository[Bid] = JsonRepository(
            self.data_dir / "bids.json", Bid, "Bid"
        )
        self.payments: JsonRepository[Payment] = JsonRepository(
            self.data_dir / "payments.json", Payment, "Payment"
        )
