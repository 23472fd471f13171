"""Firebase Realtime Database store implementation (REST API)."""

import logging
from typing import Any, Dict, Optional

import aiohttp

from domain.shared.ports.data_store import (
    IDataStore,
    StoreAuthorizationError,
    StoreError,
    StoreTransportError,
)
from domain.shared.records.record_ref import join_path
from infrastructure.config import (
    get_firebase_database_secret,
    get_firebase_timeout,
    get_firebase_url,
)

logger = logging.getLogger(__name__)


class FirebaseRealtimeDatabase(IDataStore):
    """Realtime Database adapter over the REST API.

    Maps store operations onto `{url}/{path}.json`:
    - read   -> GET
    - write  -> PUT
    - update -> PATCH (multi-path keys allowed)
    - remove -> DELETE

    `{".sv": "timestamp"}` values are resolved by the server.

    Environment Variables:
    - FIREBASE_URL: Database URL (e.g. "https://my-app.firebaseio.com")
    - FIREBASE_DATABASE_SECRET: Admin credential sent as `auth` (optional)
    - FIREBASE_TIMEOUT_SECONDS: HTTP timeout (default: 10)

    Examples:
        >>> store = FirebaseRealtimeDatabase()
        >>> await store.update("users/u1/public", {"name": "A"})
    """

    def __init__(
        self,
        url: Optional[str] = None,
        auth_token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize Realtime Database adapter.

        Args:
            url: Database URL (defaults to env FIREBASE_URL)
            auth_token: Admin secret or ID token (defaults to env FIREBASE_DATABASE_SECRET)
            timeout: HTTP timeout in seconds (defaults to env FIREBASE_TIMEOUT_SECONDS)

        Raises:
            ValueError: If the URL is missing
        """
        self.url = (url or get_firebase_url() or "").rstrip("/")
        self.auth_token = auth_token or get_firebase_database_secret()
        self.timeout = timeout if timeout is not None else get_firebase_timeout()

        if not self.url:
            raise ValueError("FIREBASE_URL is required")

    async def read(self, path: str) -> Optional[Any]:
        return await self._request("GET", path)

    async def write(self, path: str, value: Any) -> None:
        await self._request("PUT", path, value)

    async def update(self, path: str, partial: Dict[str, Any]) -> None:
        await self._request("PATCH", path, partial)

    async def remove(self, path: str) -> None:
        await self._request("DELETE", path)

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        """Send one REST call and decode its JSON body.

        Raises:
            InvalidPathError: Path is malformed (no request is sent)
            StoreAuthorizationError: HTTP 401/403
            StoreTransportError: Other HTTP errors or network failure
        """
        path = join_path(path)
        url = f"{self.url}/{path}.json"
        params = {"auth": self.auth_token} if self.auth_token else {}
        logger.debug(f"{method} {path}")

        try:
            async with aiohttp.ClientSession() as session:
                timeout = aiohttp.ClientTimeout(total=self.timeout)
                kwargs: Dict[str, Any] = {"params": params, "timeout": timeout}
                if method in ("PUT", "PATCH"):
                    kwargs["json"] = payload

                async with session.request(method, url, **kwargs) as resp:
                    if resp.status >= 400:
                        text = await resp.text()
                        raise self._error_from(path, resp.status, text)

                    return await resp.json(content_type=None)

        except aiohttp.ClientError as e:
            raise StoreTransportError(path, f"Network error: {str(e)}") from e

    @staticmethod
    def _error_from(path: str, status: int, text: str) -> StoreError:
        if status in (401, 403):
            return StoreAuthorizationError(path, text or "Permission denied")
        return StoreTransportError(path, f"HTTP {status}: {text}")
