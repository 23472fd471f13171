"""Authentication provider port (interface)."""

from abc import ABC, abstractmethod
from typing import Optional


class IAuthProvider(ABC):
    """Authentication provider interface.

    Abstracts the email/password credential service (Firebase Auth).
    The provider owns credential records and mints the identifier that
    keys the user entity in the data store.

    Examples:
        >>> provider = InMemoryAuthProvider()
        >>> uid = await provider.create_user("a@x.com", "pw1234")
        >>> await provider.remove_user("a@x.com", "pw1234")
    """

    @abstractmethod
    async def create_user(self, email: str, password: str) -> str:
        """Create an email/password credential.

        Args:
            email: Email address for the credential
            password: Plaintext password

        Returns:
            Newly minted user identifier

        Raises:
            EmailAlreadyExistsError: Email is already registered
            InvalidEmailError: Email is malformed
            WeakPasswordError: Password rejected by the provider policy
            AuthProviderUnavailableError: Provider could not be reached
        """
        pass

    @abstractmethod
    async def remove_user(self, email: str, password: str) -> None:
        """Remove the credential identified by email, checking password.

        Args:
            email: Email address of the credential
            password: Plaintext password of the credential

        Raises:
            InvalidCredentialsError: Password does not match
            CredentialNotFoundError: No credential for email
            AuthProviderUnavailableError: Provider could not be reached
        """
        pass


class AuthError(Exception):
    """Authentication provider operation failed."""

    def __init__(self, reason: str, code: Optional[str] = None):
        """Initialize with failure reason.

        Args:
            reason: Human-readable reason for failure
            code: Provider error code (e.g. "EMAIL_EXISTS"), if any
        """
        self.reason = reason
        self.code = code
        super().__init__(f"Auth error: {reason}")


class EmailAlreadyExistsError(AuthError):
    """Email is already registered with the provider."""

    pass


class InvalidEmailError(AuthError):
    """Email address is malformed."""

    pass


class WeakPasswordError(AuthError):
    """Password does not satisfy the provider's policy."""

    pass


class InvalidCredentialsError(AuthError):
    """Email/password pair was rejected."""

    pass


class CredentialNotFoundError(AuthError):
    """No credential is registered for the email."""

    pass


class AuthProviderUnavailableError(AuthError):
    """Provider could not be reached or answered unexpectedly."""

    pass
