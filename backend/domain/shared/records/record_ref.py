"""Path-scoped handle on a data store."""

import logging
import re
from typing import Any, Dict, List, Optional

from domain.shared.ports.data_store import IDataStore, InvalidPathError

logger = logging.getLogger(__name__)

_FORBIDDEN_CHARS = re.compile(r"[.#$\[\]]")


def join_path(*segments: str) -> str:
    """Join and validate store path segments.

    Segments may themselves contain `/`; the result is normalized to a
    single-slash path without leading or trailing slashes.

    Raises:
        InvalidPathError: If a segment is empty or contains `. # $ [ ]`

    Examples:
        >>> join_path("users", "u1/public")
        'users/u1/public'
    """
    parts: List[str] = []
    for segment in segments:
        if not isinstance(segment, str):
            raise InvalidPathError(repr(segment), "path segments must be strings")
        parts.extend(segment.strip("/").split("/"))

    path = "/".join(parts)
    for part in parts:
        if not part:
            raise InvalidPathError(path, "empty path segment")
        if _FORBIDDEN_CHARS.search(part):
            raise InvalidPathError(path, f"segment '{part}' contains a forbidden character")
    return path


class RecordRef:
    """Generic keyed-entity capability bound to one store path.

    Wraps load/write/update/remove for a single sub-tree so that
    entity types can compose it instead of inheriting from a base record.

    Examples:
        >>> ref = RecordRef(store, "users/u1")
        >>> ref.key
        'u1'
        >>> await ref.child("public").update({"name": "A"})
    """

    def __init__(self, store: IDataStore, path: str) -> None:
        self.store = store
        self.path = join_path(path)

    @property
    def key(self) -> str:
        """Last segment of the path (the entity key)."""
        return self.path.rsplit("/", 1)[-1]

    def child(self, *segments: str) -> "RecordRef":
        """Return a handle on a sub-path."""
        return RecordRef(self.store, join_path(self.path, *segments))

    async def read(self) -> Optional[Any]:
        logger.debug(f"read {self.path}")
        return await self.store.read(self.path)

    async def write(self, value: Any) -> None:
        logger.debug(f"write {self.path}")
        await self.store.write(self.path, value)

    async def update(self, partial: Dict[str, Any]) -> None:
        logger.debug(f"update {self.path} keys={sorted(partial)}")
        await self.store.update(self.path, partial)

    async def remove(self) -> None:
        logger.debug(f"remove {self.path}")
        await self.store.remove(self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordRef):
            return False
        return self.store is other.store and self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"RecordRef('{self.path}')"
