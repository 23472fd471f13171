"""Firebase Auth provider implementation (Identity Toolkit REST API)."""

import json
import logging
from typing import Any, Dict, Optional, Type

import aiohttp

from domain.user.auth.ports.auth_provider import (
    AuthError,
    AuthProviderUnavailableError,
    CredentialNotFoundError,
    EmailAlreadyExistsError,
    IAuthProvider,
    InvalidCredentialsError,
    InvalidEmailError,
    WeakPasswordError,
)
from infrastructure.config import (
    get_firebase_api_key,
    get_firebase_auth_url,
    get_firebase_timeout,
)

logger = logging.getLogger(__name__)

# Identity Toolkit error codes -> domain errors
_ERROR_TYPES: Dict[str, Type[AuthError]] = {
    "EMAIL_EXISTS": EmailAlreadyExistsError,
    "INVALID_EMAIL": InvalidEmailError,
    "MISSING_EMAIL": InvalidEmailError,
    "WEAK_PASSWORD": WeakPasswordError,
    "MISSING_PASSWORD": InvalidCredentialsError,
    "INVALID_PASSWORD": InvalidCredentialsError,
    "INVALID_LOGIN_CREDENTIALS": InvalidCredentialsError,
    "USER_DISABLED": InvalidCredentialsError,
    "EMAIL_NOT_FOUND": CredentialNotFoundError,
    "USER_NOT_FOUND": CredentialNotFoundError,
    "TOO_MANY_ATTEMPTS_TRY_LATER": AuthProviderUnavailableError,
}


class FirebaseAuthProvider(IAuthProvider):
    """Firebase email/password provider.

    Features:
    - `accounts:signUp` to create credentials (returns the localId)
    - `accounts:signInWithPassword` + `accounts:delete` to remove them,
      so removal is only possible with the right password
    - Firebase error codes mapped onto the AuthError hierarchy

    Environment Variables:
    - FIREBASE_API_KEY: Web API key of the project
    - FIREBASE_AUTH_URL: Identity Toolkit base URL (emulator support)
    - FIREBASE_TIMEOUT_SECONDS: HTTP timeout (default: 10)

    Examples:
        >>> provider = FirebaseAuthProvider()
        >>> uid = await provider.create_user("a@x.com", "pw1234")
        >>> await provider.remove_user("a@x.com", "pw1234")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize Firebase Auth provider.

        Args:
            api_key: Web API key (defaults to env FIREBASE_API_KEY)
            base_url: Identity Toolkit URL (defaults to env FIREBASE_AUTH_URL)
            timeout: HTTP timeout in seconds (defaults to env FIREBASE_TIMEOUT_SECONDS)

        Raises:
            ValueError: If the API key is missing
        """
        self.api_key = api_key or get_firebase_api_key()
        self.base_url = (base_url or get_firebase_auth_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_firebase_timeout()

        if not self.api_key:
            raise ValueError("FIREBASE_API_KEY is required")

    async def create_user(self, email: str, password: str) -> str:
        """Create an email/password account.

        Returns:
            The new account's localId

        Raises:
            AuthError: Firebase rejected the signup or could not be reached
        """
        data = await self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        try:
            uid: str = data["localId"]
        except KeyError as e:
            raise AuthProviderUnavailableError(f"Invalid signUp response: {str(e)}") from e

        logger.debug(f"Firebase account {uid} created")
        return uid

    async def remove_user(self, email: str, password: str) -> None:
        """Sign in with the credential, then delete the account.

        Raises:
            AuthError: Sign-in or deletion failed
        """
        data = await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        try:
            id_token = data["idToken"]
        except KeyError as e:
            raise AuthProviderUnavailableError(
                f"Invalid signInWithPassword response: {str(e)}"
            ) from e

        await self._post("accounts:delete", {"idToken": id_token})
        logger.debug(f"Firebase account {data.get('localId')} deleted")

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST to an Identity Toolkit endpoint.

        Raises:
            AuthError: On HTTP error status or network failure
        """
        url = f"{self.base_url}/{endpoint}"

        try:
            async with aiohttp.ClientSession() as session:
                timeout = aiohttp.ClientTimeout(total=self.timeout)
                async with session.post(
                    url, params={"key": self.api_key}, json=payload, timeout=timeout
                ) as resp:
                    if resp.status >= 400:
                        text = await resp.text()
                        raise self._error_from(resp.status, text)

                    data: Dict[str, Any] = await resp.json()
                    return data

        except aiohttp.ClientError as e:
            raise AuthProviderUnavailableError(f"Network error: {str(e)}") from e

    @staticmethod
    def _error_from(status: int, text: str) -> AuthError:
        """Map an Identity Toolkit error body to a domain error.

        Firebase messages look like "WEAK_PASSWORD : Password should be at
        least 6 characters"; the code is the part before the colon.
        """
        try:
            message = json.loads(text)["error"]["message"]
        except (ValueError, KeyError, TypeError):
            message = text or f"HTTP {status}"

        code = str(message).split(":", 1)[0].strip()
        error_type = _ERROR_TYPES.get(code)
        if error_type is None:
            error_type = AuthProviderUnavailableError if status >= 500 else AuthError
        return error_type(str(message), code=code)
