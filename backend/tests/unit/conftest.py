"""Unit test configuration.

Isolates unit tests from integration test setup.
Unit tests use the in-memory adapters only.
"""

import itertools

import pytest

from domain.user.core.entities.user_collection import UserCollection
from infrastructure.store.in_memory_data_store import InMemoryDataStore
from infrastructure.user.in_memory_auth_provider import InMemoryAuthProvider


@pytest.fixture
def store():
    """In-memory store with a deterministic, strictly increasing clock."""
    clock = itertools.count(1_700_000_000_000, 1000)
    return InMemoryDataStore(clock=lambda: next(clock))


@pytest.fixture
def auth_provider():
    """Create in-memory auth provider."""
    return InMemoryAuthProvider()


@pytest.fixture
def collection(store, auth_provider):
    """User collection on the in-memory adapters."""
    return UserCollection(store, auth_provider)
