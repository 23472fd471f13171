"""Unit tests for the user collection factory."""

import os
from unittest.mock import patch

import pytest

from domain.user.core.entities.user_collection import UserCollection
from infrastructure.firebase.firebase_auth_provider import FirebaseAuthProvider
from infrastructure.firebase.realtime_database import FirebaseRealtimeDatabase
from infrastructure.store.in_memory_data_store import InMemoryDataStore
from infrastructure.user.collection_factory import (
    create_user_collection,
    get_user_collection,
    reset_user_collection,
)
from infrastructure.user.in_memory_auth_provider import InMemoryAuthProvider


@pytest.fixture(autouse=True)
def _reset_singleton():
    reset_user_collection()
    yield
    reset_user_collection()


class TestCreateUserCollection:
    """Test environment-based adapter selection."""

    def test_default_is_inmemory(self):
        with patch.dict(os.environ, {}, clear=True):
            collection = create_user_collection()

        assert isinstance(collection, UserCollection)
        assert isinstance(collection.records.store, InMemoryDataStore)
        assert isinstance(collection.auth_provider, InMemoryAuthProvider)
        assert collection.path == "users"

    def test_custom_users_path(self):
        with patch.dict(os.environ, {"USERS_PATH": "app/members"}, clear=True):
            collection = create_user_collection()

        assert collection.path == "app/members"

    def test_firebase_backend(self):
        env = {
            "USER_BACKEND": "firebase",
            "FIREBASE_URL": "https://test.firebaseio.com",
            "FIREBASE_API_KEY": "key",
            "FIREBASE_DATABASE_SECRET": "secret",
        }
        with patch.dict(os.environ, env, clear=True):
            collection = create_user_collection()

        assert isinstance(collection.records.store, FirebaseRealtimeDatabase)
        assert isinstance(collection.auth_provider, FirebaseAuthProvider)
        assert collection.records.store.auth_token == "secret"

    def test_firebase_backend_without_secret_warns(self, caplog):
        env = {
            "USER_BACKEND": "firebase",
            "FIREBASE_URL": "https://test.firebaseio.com",
            "FIREBASE_API_KEY": "key",
        }
        with patch.dict(os.environ, env, clear=True):
            create_user_collection()

        assert "FIREBASE_DATABASE_SECRET not set" in caplog.text

    def test_firebase_backend_requires_url(self):
        env = {"USER_BACKEND": "firebase", "FIREBASE_API_KEY": "key"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValueError, match="FIREBASE_URL is required"):
                create_user_collection()

    def test_invalid_backend(self):
        with patch.dict(os.environ, {"USER_BACKEND": "mongodb"}, clear=True):
            with pytest.raises(ValueError, match="Invalid USER_BACKEND value"):
                create_user_collection()

    def test_env_file_is_loaded(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("USERS_PATH=from_env_file\n")

        with patch.dict(os.environ, {}, clear=True):
            collection = create_user_collection(env_file)

        assert collection.path == "from_env_file"


class TestGetUserCollection:
    """Test singleton access."""

    def test_singleton(self):
        with patch.dict(os.environ, {}, clear=True):
            first = get_user_collection()
            second = get_user_collection()

        assert first is second

    def test_reset(self):
        with patch.dict(os.environ, {}, clear=True):
            first = get_user_collection()
            reset_user_collection()
            second = get_user_collection()

        assert first is not second
