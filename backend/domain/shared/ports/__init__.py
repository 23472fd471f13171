"""Domain ports (interfaces for infrastructure adapters)."""

from domain.shared.ports.data_store import IDataStore, SERVER_TIMESTAMP

__all__ = [
    "IDataStore",
    "SERVER_TIMESTAMP",
]
