"""Configuration utilities for infrastructure layer."""

import os
from typing import Optional

from domain.user.core.entities.user_collection import DEFAULT_USERS_PATH


def get_user_backend() -> str:
    """
    Get the backend used for users.

    Returns:
        "inmemory" or "firebase" from USER_BACKEND, defaults to "inmemory"
    """
    return os.getenv("USER_BACKEND", "inmemory").lower()


def get_firebase_url() -> Optional[str]:
    """
    Get the Realtime Database base URL.

    Trailing slashes are stripped so paths can be appended directly.

    Returns:
        URL from FIREBASE_URL, or None if not set
    """
    url = os.getenv("FIREBASE_URL")
    if not url:
        return None
    return url.rstrip("/")


def get_firebase_api_key() -> Optional[str]:
    """
    Get the Web API key used for Identity Toolkit calls.

    Returns:
        Key from FIREBASE_API_KEY, or None if not set
    """
    return os.getenv("FIREBASE_API_KEY") or None


def get_firebase_auth_url() -> str:
    """
    Get the Identity Toolkit base URL.

    Point it at the Auth emulator for local runs.

    Returns:
        URL from FIREBASE_AUTH_URL, defaults to the public v1 endpoint
    """
    return os.getenv("FIREBASE_AUTH_URL", "https://identitytoolkit.googleapis.com/v1")


def get_firebase_database_secret() -> Optional[str]:
    """
    Get the admin credential for Realtime Database calls.

    Signup writes data for a user that has not authenticated yet, so the
    store calls need admin privileges. The value is sent as the `auth`
    query parameter.

    Returns:
        Secret from FIREBASE_DATABASE_SECRET, or None if not set
    """
    return os.getenv("FIREBASE_DATABASE_SECRET") or None


def get_firebase_timeout() -> float:
    """
    Get HTTP timeout for Firebase calls.

    Returns:
        Seconds from FIREBASE_TIMEOUT_SECONDS, defaults to 10
    """
    return float(os.getenv("FIREBASE_TIMEOUT_SECONDS", "10"))


def get_users_path() -> str:
    """
    Get the collection path of user records.

    Returns:
        Path from USERS_PATH, defaults to "users"
    """
    return os.getenv("USERS_PATH", DEFAULT_USERS_PATH)
