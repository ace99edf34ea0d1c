"""Job posting routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from alumni_portal.api.routes.auth import get_current_admin
from alumni_portal.core.dependencies import JobManagerDep
from alumni_portal.schemas.job import Job, JobBase, JobInsert, JobUpdate
from alumni_portal.schemas.user import User

router = APIRouter(prefix="/api/jobs", tags=["Job"])


def _job_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")


@router.get("", response_model=List[Job], summary="List jobs")
async def list_jobs(job_manager: JobManagerDep, active: bool = False) -> List[Job]:
    if active:
        return await job_manager.list_active_jobs()
    return await job_manager.list_jobs()


@router.get("/{job_id}", response_model=Job, summary="Get a job")
async def get_job(job_id: int, job_manager: JobManagerDep) -> Job:
    job = await job_manager.get_job(job_id)
    if job is None:
        raise _job_not_found()
    return job


@router.post(
    "", response_model=Job, status_code=status.HTTP_201_CREATED, summary="Post a job"
)
async def create_job(
    req: JobBase,
    job_manager: JobManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Job:
    return await job_manager.create_job(
        JobInsert(**req.model_dump(), posted_by=current_user.id)
    )


@router.put("/{job_id}", response_model=Job, summary="Update a job")
async def update_job(
    job_id: int,
    req: JobUpdate,
    job_manager: JobManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Job:
    job = await job_manager.update_job(job_id, req.model_dump(exclude_unset=True))
    if job is None:
        raise _job_not_found()
    return job


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a job")
async def delete_job(
    job_id: int,
    job_manager: JobManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Response:
    if not await job_manager.delete_job(job_id):
        raise _job_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
