"""University information management.

The university info is a single record created at startup and edited in
place by administrators.
"""

import logging
from typing import Any, Dict, Optional

from alumni_portal.schemas.university import UniversityInfo
from alumni_portal.utils.clock import now_utc
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)


class UniversityInfoManager:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def get_info(self) -> Optional[UniversityInfo]:
        return self.storage.university_info

    async def create_info(self, name: str, updated_by: int, **fields: Any) -> UniversityInfo:
        """Create the singleton record, replacing any previous one."""
        self.storage.university_info = UniversityInfo(
            id=1, name=name, updated_at=now_utc(), updated_by=updated_by, **fields
        )
        logger.info("Created university info for %s", name)
        return self.storage.university_info

    async def update_info(
        self, changes: Dict[str, Any], updated_by: int
    ) -> Optional[UniversityInfo]:
        """Merge ``changes`` into the record and stamp who changed it.

        Returns:
            The updated record, or None if it was never created.
        """
        info = self.storage.university_info
        if info is None:
            return None
        changes = {key: value for key, value in changes.items() if key != "id"}
        self.storage.university_info = info.model_copy(
            update={**changes, "updated_at": now_utc(), "updated_by": updated_by}
        )
        logger.info("University info updated by user %s: %s", updated_by, sorted(changes))
        return self.storage.university_info
