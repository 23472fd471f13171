"""Get user query."""

from dataclasses import dataclass
from typing import Optional

from domain.user.core.entities.user_collection import UserCollection
from domain.user.core.entities.user_record import UserRecord


@dataclass
class GetUserQuery:
    """Query to get user by identifier.

    Read-only operation that hydrates users from the store.

    Examples:
        >>> query = GetUserQuery(collection)
        >>> user = await query.by_id("u1")
    """

    collection: UserCollection

    async def by_id(self, user_id: str) -> Optional[UserRecord]:
        """Get user by identifier.

        Args:
            user_id: Identifier minted at signup

        Returns:
            User record or None if not found
        """
        return await self.collection.get(user_id)

    async def exists(self, user_id: str) -> bool:
        """Check if user exists.

        Args:
            user_id: Identifier minted at signup

        Returns:
            True if an entity is stored for user_id
        """
        return await self.collection.exists(user_id)
