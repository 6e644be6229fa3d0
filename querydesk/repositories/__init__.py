"""
Repository layer for data access
"""
from querydesk.repositories.kv_repository import (
    KeyValueStore,
    InMemoryKeyValueStore,
    SqlKeyValueStore,
)

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SqlKeyValueStore",
]
