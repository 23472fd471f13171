"""In-memory authentication provider for testing."""

import hashlib
import re
import uuid
from dataclasses import dataclass
from typing import Dict

from domain.user.auth.ports.auth_provider import (
    AuthProviderUnavailableError,
    CredentialNotFoundError,
    EmailAlreadyExistsError,
    IAuthProvider,
    InvalidCredentialsError,
    InvalidEmailError,
    WeakPasswordError,
)

MIN_PASSWORD_LENGTH = 6

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class _Credential:
    uid: str
    password_hash: str


def _hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class InMemoryAuthProvider(IAuthProvider):
    """In-memory implementation of the email/password provider.

    Mirrors the Firebase Auth rules that matter to callers: unique emails,
    a minimum password length, and a password check on removal.

    Examples:
        >>> provider = InMemoryAuthProvider()
        >>> uid = await provider.create_user("a@x.com", "pw1234")
        >>> provider.has_credential("a@x.com")
        True
    """

    def __init__(self) -> None:
        """Initialize empty credential storage."""
        self._credentials: Dict[str, _Credential] = {}
        self.unavailable = False

    async def create_user(self, email: str, password: str) -> str:
        self._check_available()
        key = self._normalize(email)
        if not _EMAIL_PATTERN.match(key):
            raise InvalidEmailError(f"invalid email '{email}'", code="INVALID_EMAIL")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(
                f"password should be at least {MIN_PASSWORD_LENGTH} characters",
                code="WEAK_PASSWORD",
            )
        if key in self._credentials:
            raise EmailAlreadyExistsError(f"email '{email}' already registered", code="EMAIL_EXISTS")

        uid = uuid.uuid4().hex
        self._credentials[key] = _Credential(uid=uid, password_hash=_hash_password(password))
        return uid

    async def remove_user(self, email: str, password: str) -> None:
        self._check_available()
        key = self._normalize(email)
        credential = self._credentials.get(key)
        if credential is None:
            raise CredentialNotFoundError(f"no credential for '{email}'", code="EMAIL_NOT_FOUND")
        if credential.password_hash != _hash_password(password):
            raise InvalidCredentialsError("invalid password", code="INVALID_PASSWORD")

        del self._credentials[key]

    def has_credential(self, email: str) -> bool:
        return self._normalize(email) in self._credentials

    def uid_for(self, email: str) -> str:
        return self._credentials[self._normalize(email)].uid

    def count(self) -> int:
        """Get total number of credentials."""
        return len(self._credentials)

    def clear(self) -> None:
        """Drop all credentials.

        Useful for test cleanup.
        """
        self._credentials.clear()
        self.unavailable = False

    def _check_available(self) -> None:
        if self.unavailable:
            raise AuthProviderUnavailableError("provider unreachable")

    @staticmethod
    def _normalize(email: str) -> str:
        return email.strip().lower()
