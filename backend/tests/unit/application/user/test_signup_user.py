"""Tests for signup user command."""

import pytest

from application.user.commands.signup_user import SignupUserCommand
from domain.user.auth.ports.auth_provider import EmailAlreadyExistsError


@pytest.fixture
def signup_command(collection):
    """Create signup command."""
    return SignupUserCommand(collection)


@pytest.mark.asyncio
async def test_signup_user_success(signup_command, store, auth_provider):
    """Test the full signup scenario."""
    user = await signup_command.execute(
        "a@x.com", "pw1234", {"public": {"name": "A"}, "private": {}}
    )

    uid = auth_provider.uid_for("a@x.com")
    stored = await store.read(f"users/{uid}")
    assert user.id() == uid
    assert stored["public"]["name"] == "A"
    assert stored["public"]["id"] == uid
    assert stored["public"]["created_at"] == stored["public"]["updated_at"]
    assert stored["private"] == {"email": "a@x.com"}


@pytest.mark.asyncio
async def test_signup_user_without_stamp(signup_command, store):
    """Test that stamping can be skipped."""
    user = await signup_command.execute("a@x.com", "pw1234", stamp_created=False)

    stored = await store.read(f"users/{user.id()}/public")
    assert stored == {"id": user.id()}


@pytest.mark.asyncio
async def test_signup_duplicate_email_raises(signup_command, store):
    """Test that a duplicate email fails before any store write."""
    await signup_command.execute("a@x.com", "pw1234")

    with pytest.raises(EmailAlreadyExistsError):
        await signup_command.execute("a@x.com", "other123")

    assert len(await store.read("users")) == 1
