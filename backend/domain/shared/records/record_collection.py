"""Keyed collection of records bound to a record factory."""

from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from domain.shared.ports.data_store import IDataStore
from domain.shared.records.record_ref import RecordRef, join_path

TRecord = TypeVar("TRecord")

# Builds a record from its handle and raw (store or caller) properties.
RecordFactory = Callable[[RecordRef, Dict[str, Any]], TRecord]


class RecordCollection(Generic[TRecord]):
    """Generic collection of records stored under a fixed path.

    Knows how to turn raw data into a record via `record_factory`; entity
    collections wrap an instance of this class rather than subclassing it.

    Examples:
        >>> users = RecordCollection(store, "users", UserRecord.from_raw)
        >>> record = users.new_record("u1", {"public": {}, "private": {}})
        >>> found = await users.get("u1")
    """

    def __init__(
        self,
        store: IDataStore,
        path: str,
        record_factory: RecordFactory[TRecord],
    ) -> None:
        self.store = store
        self.path = join_path(path)
        self.record_factory = record_factory

    @property
    def ref(self) -> RecordRef:
        return RecordRef(self.store, self.path)

    def ref_for(self, key: str) -> RecordRef:
        """Handle on the entity stored under key."""
        return RecordRef(self.store, join_path(self.path, key))

    def new_record(self, key: str, properties: Dict[str, Any]) -> TRecord:
        """Build a record for key without persisting it."""
        return self.record_factory(self.ref_for(key), properties)

    async def get(self, key: str) -> Optional[TRecord]:
        """Hydrate the record stored under key.

        Returns:
            Record built from the stored data, or None if nothing is stored
        """
        data = await self.ref_for(key).read()
        if data is None:
            return None
        return self.record_factory(self.ref_for(key), data)

    async def exists(self, key: str) -> bool:
        return await self.ref_for(key).read() is not None

    async def keys(self) -> List[str]:
        """List keys of all records in the collection."""
        data = await self.ref.read()
        if not isinstance(data, dict):
            return []
        return sorted(data.keys())
