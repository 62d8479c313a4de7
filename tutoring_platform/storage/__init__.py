"""Data store implementations for the marketplace collections."""

from .base import DataStore, Repository
from .memory import InMemoryDataStore, InMemoryRepository
from .json_store import JsonDataStore, JsonRepository
from .seed import DEMO_USERS, seed_demo_data

__all__ = [
    "DataStore",
    "Repository",
    "InMemoryDataStore",
    "InMemoryRepository",
    "JsonDataStore",
    "JsonRepository",
    "DEMO_USERS",
    "seed_demo_data",
]
