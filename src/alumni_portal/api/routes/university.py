"""University information routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from alumni_portal.api.routes.auth import get_current_admin
from alumni_portal.core.dependencies import UniversityInfoManagerDep
from alumni_portal.schemas.university import UniversityInfo, UniversityInfoUpdate
from alumni_portal.schemas.user import User

router = APIRouter(prefix="/api/university-info", tags=["University"])


def _info_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="University information not found",
    )


@router.get("", response_model=UniversityInfo, summary="Get university information")
async def get_university_info(
    university_manager: UniversityInfoManagerDep,
) -> UniversityInfo:
    info = await university_manager.get_info()
    if info is None:
        raise _info_not_found()
    return info


@router.patch("", response_model=UniversityInfo, summary="Update university information")
async def update_university_info(
    req: UniversityInfoUpdate,
    university_manager: UniversityInfoManagerDep,
    current_user: User = Depends(get_current_admin),
) -> UniversityInfo:
    info = await university_manager.update_info(
        req.model_dump(exclude_unset=True), updated_by=current_user.id
    )
    if info is None:
        raise _info_not_found()
    return info
