"""In-memory data store for testing."""

import copy
import time
from typing import Any, Callable, Dict, List, Optional, Set

from domain.shared.ports.data_store import (
    IDataStore,
    StoreAuthorizationError,
    is_server_timestamp,
)
from domain.shared.records.record_ref import join_path


class InMemoryDataStore(IDataStore):
    """In-memory implementation of the hierarchical data store.

    Keeps a nested dict tree and mimics Realtime Database semantics:
    - server-timestamp sentinels resolve to epoch milliseconds at commit
    - `update` only touches the given child keys (which may be sub-paths)
    - writing None or an empty mapping removes the node
    - removing a node prunes parents left empty

    Examples:
        >>> store = InMemoryDataStore()
        >>> await store.write("users/u1", {"public": {"name": "A"}})
        >>> await store.update("users/u1", {"public/age": 3})
        >>> await store.read("users/u1/public")
        {'name': 'A', 'age': 3}
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        """Initialize empty tree.

        Args:
            clock: Returns epoch milliseconds (defaults to wall clock)
        """
        self._root: Dict[str, Any] = {}
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last_timestamp = 0
        self.fail_on: Set[str] = set()
        self.calls: List[str] = []

    async def read(self, path: str) -> Optional[Any]:
        path = self._check("read", path)
        node: Any = self._root
        for part in path.split("/"):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return copy.deepcopy(node)

    async def write(self, path: str, value: Any) -> None:
        path = self._check("write", path)
        self._set(path, self._resolve(value, self._now()))

    async def update(self, path: str, partial: Dict[str, Any]) -> None:
        path = self._check("update", path)
        now = self._now()
        for key, value in partial.items():
            self._set(join_path(path, key), self._resolve(value, now))

    async def remove(self, path: str) -> None:
        path = self._check("remove", path)
        self._set(path, None)

    def fail(self, *operations: str) -> None:
        """Make the given operations ("write", "update", ...) raise."""
        self.fail_on.update(operations)

    def clear(self) -> None:
        """Drop all data.

        Useful for test cleanup.
        """
        self._root.clear()
        self.fail_on.clear()
        self.calls.clear()

    def dump(self) -> Dict[str, Any]:
        return copy.deepcopy(self._root)

    def _check(self, operation: str, path: str) -> str:
        path = join_path(path)
        self.calls.append(f"{operation} {path}")
        if operation in self.fail_on:
            raise StoreAuthorizationError(path, "Permission denied")
        return path

    def _now(self) -> int:
        # Non-decreasing, so successive stamps never go backwards.
        self._last_timestamp = max(self._last_timestamp, self._clock())
        return self._last_timestamp

    def _resolve(self, value: Any, now: int) -> Any:
        if is_server_timestamp(value):
            return now
        if isinstance(value, dict):
            resolved = {k: self._resolve(v, now) for k, v in value.items()}
            return {k: v for k, v in resolved.items() if v is not None and v != {}}
        return copy.deepcopy(value)

    def _set(self, path: str, value: Any) -> None:
        parts = path.split("/")
        parents: List[Dict[str, Any]] = [self._root]
        node = self._root
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                if value is None or value == {}:
                    return
                child = {}
                node[part] = child
            node = child
            parents.append(node)

        if value is None or value == {}:
            node.pop(parts[-1], None)
        else:
            node[parts[-1]] = value

        # Prune parents left empty, deepest first.
        for depth in range(len(parts) - 1, 0, -1):
            parent, key = parents[depth - 1], parts[depth - 1]
            if parent.get(key) == {}:
                del parent[key]
