"""
Abstract Key-Value Storage Interface

DESIGN DECISION: Persistence is a plain get/set-by-key store holding
JSON text, the same shape as browser local storage.
This allows us to:
1. Use an in-memory store for tests and throwaway sessions
2. Persist to a single JSON file on disk
3. Keep the ledger and the currency core unaware of where data lives

The interface is intentionally tiny - we're not building a database.
"""

from abc import ABC, abstractmethod
from typing import Optional


# Keys used by the tracker
EXPENSES_KEY = "expenses"
SELECTED_CURRENCY_KEY = "selectedCurrency"
AUDIT_LOG_KEY = "auditLog"


class KeyValueStore(ABC):
    """
    Abstract interface for key-value storage.

    Values are strings (serialized JSON). Implementations must make a
    value visible to get() as soon as set() returns.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key was never set

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key. Removing a missing key is not an error.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass
