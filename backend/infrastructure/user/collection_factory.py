"""User collection factory for environment-based selection.

This factory wires the user collection to its adapters based on
the USER_BACKEND environment variable:
- "inmemory": InMemoryDataStore + InMemoryAuthProvider (for testing)
- "firebase": FirebaseRealtimeDatabase + FirebaseAuthProvider (for production)

Default: inmemory
"""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from domain.user.core.entities.user_collection import UserCollection
from infrastructure.config import get_user_backend, get_users_path
from infrastructure.firebase.firebase_auth_provider import FirebaseAuthProvider
from infrastructure.firebase.realtime_database import FirebaseRealtimeDatabase
from infrastructure.store.in_memory_data_store import InMemoryDataStore
from infrastructure.user.in_memory_auth_provider import InMemoryAuthProvider

logger = logging.getLogger(__name__)


def create_user_collection(env_file: Optional[Path] = None) -> UserCollection:
    """Create user collection based on environment configuration.

    Args:
        env_file: Optional .env file loaded before reading configuration
            (existing environment variables win)

    Returns:
        UserCollection: The configured collection

    Environment Variables:
        USER_BACKEND: "inmemory" | "firebase" (default: inmemory)
        USERS_PATH: Collection path (default: users)
        FIREBASE_URL: Realtime Database URL (required for firebase)
        FIREBASE_API_KEY: Web API key (required for firebase)
        FIREBASE_DATABASE_SECRET: Admin credential, needed for signup
    """
    if env_file is not None and env_file.exists():
        load_dotenv(env_file)

    backend = get_user_backend()
    path = get_users_path()

    if backend == "firebase":
        # Firebase for production
        store = FirebaseRealtimeDatabase()
        if not store.auth_token:
            logger.warning(
                "FIREBASE_DATABASE_SECRET not set: signup data writes will be "
                "rejected unless security rules allow unauthenticated writes"
            )
        collection = UserCollection(store, FirebaseAuthProvider(), path)

    elif backend == "inmemory":
        # In-memory adapters for testing
        collection = UserCollection(InMemoryDataStore(), InMemoryAuthProvider(), path)

    else:
        raise ValueError(
            f"Invalid USER_BACKEND value: {backend}. " "Expected 'inmemory' or 'firebase'"
        )

    logger.info(f"User collection '{collection.path}' using {backend} backend")
    return collection


# Singleton instance
_user_collection: Optional[UserCollection] = None


def get_user_collection() -> UserCollection:
    """Get singleton user collection instance.

    Returns:
        UserCollection: The singleton collection
    """
    global _user_collection

    if _user_collection is None:
        _user_collection = create_user_collection(Path(__file__).parents[2] / ".env")

    return _user_collection


def reset_user_collection() -> None:
    """Reset the singleton (for testing purposes)."""
    global _user_collection
    _user_collection = None
