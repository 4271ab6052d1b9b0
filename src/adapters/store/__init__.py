"""Key-value store adapters - In-memory and database implementations."""

from .memory import InMemoryKeyValueStore
from .postgres import PostgresKeyValueStore, run_migrations
from .retrying import RetryingKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "PostgresKeyValueStore",
    "RetryingKeyValueStore",
    "run_migrations",
]
