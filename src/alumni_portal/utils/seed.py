"""Startup seed data: the default administrator and the university info."""

import logging

from alumni_portal.config import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    UNIVERSITY_NAME,
)
from alumni_portal.schemas.user import UserInsert
from alumni_portal.utils.memory_store import MemStorage
from alumni_portal.utils.university_manager import UniversityInfoManager
from alumni_portal.utils.user_manager import UserManager

logger = logging.getLogger(__name__)


async def seed_defaults(storage: MemStorage) -> None:
    """Create the default admin and university info if they are missing."""
    user_manager = UserManager(storage)
    admin = await user_manager.get_user_by_username(DEFAULT_ADMIN_USERNAME)
    if admin is None:
        admin = await user_manager.create_user(
            UserInsert(
                username=DEFAULT_ADMIN_USERNAME,
                password_hash=user_manager.hash_password(DEFAULT_ADMIN_PASSWORD),
                email=DEFAULT_ADMIN_EMAIL,
                first_name="Admin",
                last_name="User",
                is_admin=True,
                company=UNIVERSITY_NAME,
                position="System Administrator",
            )
        )
        logger.info("Seeded default admin account: %s", admin.username)

    university_manager = UniversityInfoManager(storage)
    if await university_manager.get_info() is None:
        await university_manager.create_info(
            name=UNIVERSITY_NAME,
            updated_by=admin.id,
            description=f"{UNIVERSITY_NAME} alumni network.",
        )
