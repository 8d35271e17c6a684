"""User domain service."""

import re
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain.entities import User
from spendwise.domain.errors import ConflictError, NotFoundError, ValidationError, user_not_found
from spendwise.domain.validation import require_name
from spendwise.log import get_logger

logger = get_logger(__name__)

USERNAME_MAX_LENGTH = 50
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(self, username: str, email: str) -> int:
        """Create a user.

        Args:
            username: Unique username
            email: Email address

        Returns:
            User ID

        Raises:
            ValidationError: If username or email is invalid
            ConflictError: If the username is already taken
        """
        username = require_name(username, "Username", max_length=USERNAME_MAX_LENGTH)
        email = (email or "").strip()
        if not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address: '{email}'")
        if self.db.get_user_by_username(username) is not None:
            raise ConflictError(f"Username '{username}' already exists")

        user_id = self.db.create_user(username=username, email=email)
        logger.info("user_created", user_id=user_id, username=username)
        return user_id

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get_user(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.get_user_by_username(username)

    def list_users(self) -> list[User]:
        return self.db.list_users()

    def delete_user(self, user_id: int) -> None:
        """Delete a user with all of their transactions, budgets, goals and notifications.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        self.db.delete_user(user_id)
        logger.info("user_deleted", user_id=user_id)
