"""User management utilities.

This module provides user management functionality including user storage,
password hashing, uniqueness checks and the alumni name search.
"""

import logging
from typing import Any, Dict, List, Optional

import bcrypt

from alumni_portal import config
from alumni_portal.core.exceptions import UserAlreadyExistsError, ValidationError
from alumni_portal.schemas.user import User, UserInsert
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class UserManager:
    """Manages user records held in the in-memory store."""

    def __init__(self, storage: MemStorage):
        """Initialize UserManager.

        Args:
            storage: The application's MemStorage.
        """
        self.storage = storage

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_BYTES:
            logger.warning(
                "Password exceeds %d bytes (%d bytes), truncating",
                BCRYPT_MAX_BYTES,
                len(password_bytes),
            )
            password_bytes = password_bytes[:BCRYPT_MAX_BYTES]

        salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    async def get_user(self, user_id: int) -> Optional[User]:
        return self.storage.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, ignoring case.

        Args:
            username: Username to look up.

        Returns:
            User object if found, None otherwise.
        """
        wanted = username.lower()
        return self.storage.users.first(lambda u: u.username.lower() == wanted)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        return self.storage.users.first(lambda u: u.email.lower() == wanted)

    async def list_users(self) -> List[User]:
        return self.storage.users.all()

    async def create_user(self, data: UserInsert) -> User:
        """Create a new user.

        Args:
            data: The user fields, with the password already hashed.

        Returns:
            Created User object.

        Raises:
            UserAlreadyExistsError: If the username or email is taken.
        """
        if await self.get_user_by_username(data.username):
            raise UserAlreadyExistsError("username", data.username)
        if await self.get_user_by_email(data.email):
            raise UserAlreadyExistsError("email", data.email)

        user = self.storage.users.insert(
            lambda user_id: User(id=user_id, **data.model_dump())
        )
        logger.info("Created user: %s (id=%s)", user.username, user.id)
        return user

    async def update_user(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        """Merge ``changes`` into a user.

        Raises:
            UserAlreadyExistsError: If the new email belongs to another user.
        """
        new_email = changes.get("email")
        if new_email:
            owner = await self.get_user_by_email(new_email)
            if owner is not None and owner.id != user_id:
                raise UserAlreadyExistsError("email", new_email)

        user = self.storage.users.update(user_id, changes)
        if user is not None:
            logger.info("Updated user %s: %s", user_id, sorted(changes))
        return user

    async def delete_user(self, user_id: int) -> bool:
        deleted = self.storage.users.delete(user_id)
        if deleted:
            logger.info("Deleted user: %s", user_id)
        return deleted

    async def find_users_by_name(self, term: str) -> List[User]:
        """Search users by first name, last name or full name.

        The match is a case-insensitive substring test with no ranking.

        Args:
            term: Text to look for.

        Returns:
            Every matching user, in insertion order.
        """
        needle = term.lower()

        def matches(user: User) -> bool:
            first = user.first_name.lower()
            last = user.last_name.lower()
            return needle in first or needle in last or needle in f"{first} {last}"

        return self.storage.users.filter(matches)

    async def search_users(self, term: str) -> List[User]:
        """Run the alumni name search on a user-supplied term.

        Raises:
            ValidationError: If the stripped term is shorter than
                MIN_SEARCH_TERM_LENGTH.
        """
        term = term.strip()
        if len(term) < config.MIN_SEARCH_TERM_LENGTH:
            raise ValidationError(
                f"Search term must be at least {config.MIN_SEARCH_TERM_LENGTH} characters"
            )
        return await self.find_users_by_name(term)
