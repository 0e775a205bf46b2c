"""
Storage Package

Provides the abstract key-value interface and its implementations.
Currently implements in-memory and JSON-file backends.
"""

from expense_tracker.storage.interface import (
    AUDIT_LOG_KEY,
    EXPENSES_KEY,
    SELECTED_CURRENCY_KEY,
    KeyValueStore,
    NotFoundError,
    StorageError,
)
from expense_tracker.storage.memory import InMemoryKeyValueStore
from expense_tracker.storage.json_file import JsonFileKeyValueStore, create_store

__all__ = [
    # Interface
    "KeyValueStore",
    # Keys
    "AUDIT_LOG_KEY",
    "EXPENSES_KEY",
    "SELECTED_CURRENCY_KEY",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "create_store",
]
