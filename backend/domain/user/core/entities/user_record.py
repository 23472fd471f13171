"""UserRecord entity - one user split into public/private partitions."""

import logging
from typing import Any, Dict, Mapping, Optional

from domain.shared.ports.data_store import SERVER_TIMESTAMP, StoreError
from domain.shared.records.record_ref import RecordRef
from domain.user.auth.ports.auth_provider import CredentialNotFoundError, IAuthProvider
from domain.user.core.value_objects.partitions import (
    PRIVATE,
    PUBLIC,
    PrivatePartition,
    PublicPartition,
    normalize_properties,
)
from domain.user.core.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class UserRecord:
    """User entity stored under `<collection>/<id>` in the data store.

    The entity is a working snapshot: `public` and `private` can diverge
    from the store until one of the write/update calls succeeds.

    Invariants:
    - public.id equals the store key at all times after construction
    - the data sub-tree is only removed after the credential is removed

    A record instance is not safe for concurrent delete/update calls;
    callers must serialize them.

    Examples:
        >>> record = UserRecord.from_raw(ref, {"public": {"name": "A"}}, provider)
        >>> record.id()
        'u1'
        >>> record.public["name"] = "B"
        >>> await record.update_public()
    """

    def __init__(
        self,
        ref: RecordRef,
        public: PublicPartition,
        private: PrivatePartition,
        auth_provider: IAuthProvider,
    ) -> None:
        self.ref = ref
        self.public = public
        self.private = private
        self.auth_provider = auth_provider

    @classmethod
    def from_raw(
        cls,
        ref: RecordRef,
        properties: Optional[Mapping[str, Any]],
        auth_provider: IAuthProvider,
    ) -> "UserRecord":
        """Build a record from its handle and raw properties.

        Used both on the signup path and when hydrating from the store.

        Raises:
            InvalidUserPropertiesError: If properties are not shaped as partitions
        """
        public, private = normalize_properties(ref.key, properties)
        return cls(ref, public, private, auth_provider)

    def id(self) -> str:
        """Identifier of this user, read from the public partition."""
        self._pin_id()
        return str(self.public.id)

    @property
    def user_id(self) -> UserId:
        return UserId(self.id())

    @property
    def path(self) -> str:
        return self.ref.path

    def timestamp(self, created: bool = False) -> None:
        """Stamp server-resolved audit times into the public partition.

        `updated_at` is always stamped, also for private updates;
        `created_at` only when created is True.
        """
        if created:
            self.public.created_at = SERVER_TIMESTAMP
        self.public.updated_at = SERVER_TIMESTAMP

    def _pin_id(self) -> None:
        self.public.id = self.ref.key

    def to_dict(self) -> Dict[str, Any]:
        return {PUBLIC: self.public.to_dict(), PRIVATE: self.private.to_dict()}

    async def write(self, created: bool = False) -> "UserRecord":
        """Persist the whole entity, replacing whatever is stored.

        Args:
            created: Also stamp created_at/updated_at before writing

        Returns:
            This record, for chaining

        Raises:
            StoreError: If the store rejects the write
        """
        if created:
            self.timestamp(created=True)
        self._pin_id()
        await self.ref.write(self.to_dict())
        return self

    async def update_public(self, created: bool = False) -> "UserRecord":
        """Merge-write the public partition.

        Fields absent from the in-memory partition are left untouched
        in the store. `created_at` is only sent on creation calls.

        Args:
            created: Also stamp created_at

        Returns:
            This record, for chaining

        Raises:
            StoreError: If the store rejects the update
        """
        self.timestamp(created)
        self._pin_id()
        partial = self.public.to_dict()
        if not created:
            partial.pop("created_at", None)
        await self.ref.child(PUBLIC).update(partial)
        return self

    async def update_private(self) -> "UserRecord":
        """Merge-write the private partition and bump public.updated_at.

        Both changes go out as one multi-path update, so the store
        applies them together.

        Returns:
            This record, for chaining

        Raises:
            StoreError: If the store rejects the update
        """
        self.timestamp()
        partial: Dict[str, Any] = {
            f"{PRIVATE}/{key}": value for key, value in self.private.to_dict().items()
        }
        partial[f"{PUBLIC}/updated_at"] = self.public.updated_at
        await self.ref.update(partial)
        return self

    async def delete(self, password: str) -> None:
        """Remove the credential, then the entity data.

        The data sub-tree is never touched if the credential removal fails.
        If the credential is removed but the data removal fails, the data is
        left orphaned; the error is logged and re-raised, no compensation
        is attempted.

        Args:
            password: Plaintext password of this user's credential

        Raises:
            AuthError: Credential removal failed; the entity is intact
            StoreError: Data removal failed after the credential was removed
        """
        email = self.private.email
        if not email:
            raise CredentialNotFoundError(
                f"user {self.id()} has no private email", code="EMAIL_NOT_FOUND"
            )

        await self.auth_provider.remove_user(email, password)

        try:
            await self.ref.remove()
        except StoreError as e:
            logger.error(
                f"Credential for user {self.id()} removed but data at "
                f"'{self.path}' was not: {e.reason}"
            )
            raise

        logger.info(f"Deleted user {self.id()}")

    def __eq__(self, other: object) -> bool:
        """Equality based on store path (entity identity)."""
        if not isinstance(other, UserRecord):
            return False
        return self.ref == other.ref

    def __hash__(self) -> int:
        return hash(self.ref)

    def __repr__(self) -> str:
        return f"UserRecord('{self.path}')"
