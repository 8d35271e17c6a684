"""Utility for resolving usernames to IDs."""

from spendwise.domain.errors import NotFoundError, user_not_found
from spendwise.domain.user import UserService


def resolve_user(user_service: UserService, user: str | int) -> int:
    """Resolve a username or ID to a user ID.

    A numeric value is tried as an ID first, then as a username.

    Args:
        user_service: UserService instance
        user: Username or ID

    Returns:
        User ID

    Raises:
        NotFoundError: If no user matches
    """
    if isinstance(user, int):
        if user_service.get_user(user) is None:
            raise NotFoundError(user_not_found(user))
        return user

    text = user.strip()
    if text.isdigit():
        found = user_service.get_user(int(text))
        if found is not None:
            return found.id

    found = user_service.get_user_by_username(text)
    if found is None:
        raise NotFoundError(f"User '{text}' not found")
    return found.id
