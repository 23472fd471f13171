"""UserCollection - the keyed set of all users."""

import logging
from functools import partial
from typing import Any, List, Mapping, Optional

from domain.shared.ports.data_store import IDataStore, StoreError
from domain.shared.records.record_collection import RecordCollection
from domain.user.auth.ports.auth_provider import IAuthProvider
from domain.user.core.entities.user_record import UserRecord
from domain.user.core.value_objects.partitions import PublicPartition, with_private_email

logger = logging.getLogger(__name__)

DEFAULT_USERS_PATH = "users"


class UserCollection:
    """Collection of user records with email/password signup.

    Every identifier of a new user is minted by the authentication
    provider; the collection never invents one.

    Note:
        `signup` writes data under an identity that has not authenticated
        yet, so the store credentials used here need elevated (admin)
        write privileges. Without them the data write fails with
        `StoreAuthorizationError` every time.

    Examples:
        >>> users = UserCollection(store, auth_provider)
        >>> record = await users.signup("a@x.com", "pw1234", {"public": {"name": "A"}})
        >>> record.private.email
        'a@x.com'
    """

    def __init__(
        self,
        store: IDataStore,
        auth_provider: IAuthProvider,
        path: str = DEFAULT_USERS_PATH,
    ) -> None:
        self.auth_provider = auth_provider
        self.records: RecordCollection[UserRecord] = RecordCollection(
            store,
            path,
            partial(UserRecord.from_raw, auth_provider=auth_provider),
        )

    @property
    def path(self) -> str:
        return self.records.path

    def new_record(self, key: str, properties: Optional[Mapping[str, Any]]) -> UserRecord:
        """Build a not-yet-persisted record for key."""
        return self.records.new_record(key, dict(properties or {}))

    async def get(self, user_id: str) -> Optional[UserRecord]:
        return await self.records.get(user_id)

    async def exists(self, user_id: str) -> bool:
        return await self.records.exists(user_id)

    async def ids(self) -> List[str]:
        return await self.records.keys()

    async def signup(
        self,
        email: str,
        password: str,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> UserRecord:
        """Create the credential, then write the user entity.

        The email is injected into `private.email`, overwriting any email
        the caller supplied. Audit timestamps supplied by the caller are
        dropped so only the store clock sets them. The caller's properties
        are not mutated.

        Args:
            email: Email for the credential
            password: Plaintext password for the credential
            properties: `{"public": {...}, "private": {...}}`, either may be omitted

        Returns:
            The persisted user record

        Raises:
            InvalidUserPropertiesError: Properties malformed; nothing was created
            AuthError: Credential creation failed; nothing was written
            StoreError: Entity write failed after the credential was created
        """
        properties = with_private_email(properties, email)

        uid = await self.auth_provider.create_user(email, password)
        logger.debug(f"Created credential {uid} for {email}")

        try:
            record = self.new_record(uid, properties)
            for name in PublicPartition.AUDIT:
                setattr(record.public, name, None)
            await record.write()
        except StoreError as e:
            logger.error(
                f"Credential {uid} created but user data under '{self.path}' "
                f"was not written: {e.reason}"
            )
            raise

        logger.info(f"Signed up user {uid}")
        return record
