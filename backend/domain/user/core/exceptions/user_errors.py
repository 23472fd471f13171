"""User domain exceptions."""


class UserDomainError(Exception):
    """Base exception for User domain errors."""

    pass


class UserNotFoundError(UserDomainError):
    """User was not found in the store."""

    def __init__(self, identifier: str):
        """Initialize with user identifier.

        Args:
            identifier: User ID that was not found
        """
        self.identifier = identifier
        super().__init__(f"User not found: {identifier}")


class InvalidUserPropertiesError(UserDomainError):
    """User properties do not have the public/private shape."""

    def __init__(self, reason: str):
        """Initialize with reason.

        Args:
            reason: Why the properties were rejected
        """
        self.reason = reason
        super().__init__(f"Invalid user properties: {reason}")
