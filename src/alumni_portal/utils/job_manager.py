"""Job posting management."""

import logging
from typing import Any, Dict, List, Optional

from alumni_portal.schemas.job import Job, JobInsert
from alumni_portal.utils.clock import now_utc
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)


class JobManager:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def get_job(self, job_id: int) -> Optional[Job]:
        return self.storage.jobs.get(job_id)

    async def list_jobs(self) -> List[Job]:
        return self.storage.jobs.all()

    async def list_active_jobs(self) -> List[Job]:
        """Jobs with no expiry date or an expiry date in the future."""
        now = now_utc()
        return self.storage.jobs.filter(
            lambda j: j.expires_at is None or j.expires_at > now
        )

    async def create_job(self, data: JobInsert) -> Job:
        job = self.storage.jobs.insert(
            lambda job_id: Job(id=job_id, posted_at=now_utc(), **data.model_dump())
        )
        logger.info("Created job: %s at %s (id=%s)", job.title, job.company, job.id)
        return job

    async def update_job(self, job_id: int, changes: Dict[str, Any]) -> Optional[Job]:
        return self.storage.jobs.update(job_id, changes)

    async def delete_job(self, job_id: int) -> bool:
        deleted = self.storage.jobs.delete(job_id)
        if deleted:
            logger.info("Deleted job: %s", job_id)
        return deleted
