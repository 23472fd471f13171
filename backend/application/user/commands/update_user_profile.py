"""Update user profile command."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from domain.user.core.entities.user_collection import UserCollection
from domain.user.core.entities.user_record import UserRecord
from domain.user.core.exceptions.user_errors import UserNotFoundError
from domain.user.core.value_objects.partitions import PrivatePartition, PublicPartition


@dataclass
class UpdateUserProfileCommand:
    """Command to change fields of a user's partitions.

    Only the partitions passed in are written. Reserved fields (`id`,
    the audit timestamps and the credential email) cannot be changed
    through this command.

    Examples:
        >>> command = UpdateUserProfileCommand(collection)
        >>> user = await command.execute("u1", public={"name": "B"})
    """

    collection: UserCollection

    async def execute(
        self,
        user_id: str,
        public: Optional[Mapping[str, Any]] = None,
        private: Optional[Mapping[str, Any]] = None,
    ) -> UserRecord:
        """Execute update profile command.

        Args:
            user_id: Identifier of the user
            public: Fields to set in the public partition
            private: Fields to set in the private partition

        Returns:
            Updated user record

        Raises:
            UserNotFoundError: If no entity is stored for user_id
            ValueError: If a reserved field is passed
            StoreError: If a partition update fails
        """
        if public and any(key in public for key in PublicPartition.RESERVED):
            raise ValueError(f"{', '.join(PublicPartition.RESERVED)} cannot be updated")
        if private and any(key in private for key in PrivatePartition.RESERVED):
            raise ValueError(f"{', '.join(PrivatePartition.RESERVED)} cannot be updated")

        user = await self.collection.get(user_id)

        if user is None:
            raise UserNotFoundError(user_id)

        if public:
            user.public.update(public)
            await user.update_public()

        if private:
            user.private.update(private)
            await user.update_private()

        return user
