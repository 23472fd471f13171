"""Sign up user command."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from domain.user.core.entities.user_collection import UserCollection
from domain.user.core.entities.user_record import UserRecord


@dataclass
class SignupUserCommand:
    """Command to register a new email/password user.

    Creates the credential and the user entity, then stamps the audit
    timestamps into the public partition.

    Examples:
        >>> command = SignupUserCommand(collection)
        >>> user = await command.execute("a@x.com", "pw1234", {"public": {"name": "A"}})
        >>> user.private.email
        'a@x.com'
    """

    collection: UserCollection

    async def execute(
        self,
        email: str,
        password: str,
        properties: Optional[Mapping[str, Any]] = None,
        stamp_created: bool = True,
    ) -> UserRecord:
        """Execute signup command.

        Args:
            email: Email for the credential
            password: Plaintext password
            properties: Initial `{"public": ..., "private": ...}` data
            stamp_created: Stamp created_at/updated_at after the entity write

        Returns:
            Created user record

        Raises:
            AuthError: Credential creation failed, nothing was written
            StoreError: Entity write or timestamp update failed
        """
        user = await self.collection.signup(email, password, properties)

        if stamp_created:
            await user.update_public(created=True)

        return user
