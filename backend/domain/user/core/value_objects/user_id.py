"""UserId value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserId:
    """User identifier value object.

    Minted by the authentication provider and reused as the entity key
    in the data store. Immutable.

    Examples:
        >>> user_id = UserId("kX3dP0aQz1")
        >>> str(user_id)
        'kX3dP0aQz1'

    Raises:
        ValueError: If empty, too long, or contains a path separator
    """

    value: str

    def __post_init__(self) -> None:
        """Validate identifier format."""
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("User id cannot be empty")

        if "/" in self.value:
            raise ValueError(f"User id cannot contain '/': {self.value}")

        if len(self.value) > 128:
            raise ValueError(
                f"User id too long ({len(self.value)} chars). Maximum 128 characters allowed"
            )

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"UserId('{self.value}')"
