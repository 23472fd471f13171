"""Data store port (interface).

Abstracts a keyed hierarchical store (Firebase Realtime Database style):
arbitrary JSON-like trees addressed by `/`-separated paths.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

# Firebase server-value marker, resolved to epoch milliseconds at commit.
SERVER_TIMESTAMP: Dict[str, str] = {".sv": "timestamp"}


def is_server_timestamp(value: Any) -> bool:
    """Check whether a value is the server-timestamp sentinel.

    Examples:
        >>> is_server_timestamp({".sv": "timestamp"})
        True
        >>> is_server_timestamp(1700000000000)
        False
    """
    return isinstance(value, dict) and value == SERVER_TIMESTAMP


class IDataStore(ABC):
    """Keyed hierarchical data store interface.

    Implementations must resolve `SERVER_TIMESTAMP` sentinels anywhere inside
    written values. Every method raises `StoreError` (or a subclass) on
    authorization denial or transport failure.

    Examples:
        >>> store = InMemoryDataStore()
        >>> await store.write("users/u1", {"public": {"name": "A"}})
        >>> await store.read("users/u1/public/name")
        'A'
    """

    @abstractmethod
    async def read(self, path: str) -> Optional[Any]:
        """Read the value at path.

        Args:
            path: Slash-separated store path

        Returns:
            Stored value, or None if nothing is stored at path
        """
        pass

    @abstractmethod
    async def write(self, path: str, value: Any) -> None:
        """Replace the value at path (full write).

        Args:
            path: Slash-separated store path
            value: JSON-like value; replaces the whole sub-tree
        """
        pass

    @abstractmethod
    async def update(self, path: str, partial: Dict[str, Any]) -> None:
        """Merge-write keys into the mapping at path.

        Only the keys present in `partial` are touched; sibling keys
        already stored under path are left as they are.

        Args:
            path: Slash-separated store path
            partial: Mapping of child keys to new values
        """
        pass

    @abstractmethod
    async def remove(self, path: str) -> None:
        """Remove the sub-tree at path.

        Removing a missing path is not an error.
        """
        pass


class StoreError(Exception):
    """Data store operation failed."""

    def __init__(self, path: str, reason: str):
        """Initialize with failing path and reason.

        Args:
            path: Store path the operation targeted
            reason: Human-readable reason for failure
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Store error at '{path}': {reason}")


class StoreAuthorizationError(StoreError):
    """Store rejected the operation (security rules / missing privilege)."""

    pass


class StoreTransportError(StoreError):
    """Store could not be reached or answered with an unexpected error."""

    pass


class InvalidPathError(StoreError):
    """Store path is malformed."""

    pass
