"""Delete user command."""

from dataclasses import dataclass

from domain.user.core.entities.user_collection import UserCollection
from domain.user.core.exceptions.user_errors import UserNotFoundError


@dataclass
class DeleteUserCommand:
    """Command to delete a user's credential and data.

    Examples:
        >>> command = DeleteUserCommand(collection)
        >>> await command.execute("u1", "pw1234")
    """

    collection: UserCollection

    async def execute(self, user_id: str, password: str) -> None:
        """Execute delete user command.

        Args:
            user_id: Identifier of the user
            password: Plaintext password of the user's credential

        Raises:
            UserNotFoundError: If no entity is stored for user_id
            AuthError: Credential removal failed, data untouched
            StoreError: Data removal failed after the credential was removed
        """
        user = await self.collection.get(user_id)

        if user is None:
            raise UserNotFoundError(user_id)

        await user.delete(password)
