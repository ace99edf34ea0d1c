"""User directory routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from alumni_portal.api.routes.auth import get_current_admin, get_current_user
from alumni_portal.core import permissions
from alumni_portal.core.dependencies import UserManagerDep
from alumni_portal.core.exceptions import UserAlreadyExistsError, ValidationError
from alumni_portal.schemas.user import User, UserPublic, UserUpdate, to_public

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserPublic], summary="List users")
async def list_users(
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[UserPublic]:
    return [to_public(user) for user in await user_manager.list_users()]


@router.get("/search/{term}", response_model=List[UserPublic], summary="Search alumni by name")
async def search_users(
    term: str,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[UserPublic]:
    """Search users by first name, last name or full name.

    Raises:
        HTTPException: If the search term is too short.
    """
    try:
        users = await user_manager.search_users(term)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [to_public(user) for user in users]


@router.get("/{user_id}", response_model=UserPublic, summary="Get a user")
async def get_user(
    user_id: int,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> UserPublic:
    user = await user_manager.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return to_public(user)


@router.put("/{user_id}", response_model=UserPublic, summary="Update a user")
async def update_user(
    user_id: int,
    req: UserUpdate,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> UserPublic:
    """Update a user's profile.

    Permission requirements:
    - Admin: Can update any user, including the admin flag
    - Alumni: Can only update their own profile

    Raises:
        HTTPException: If permission denied or user not found.
    """
    target = await user_manager.get_user(user_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not permissions.can_edit_user(current_user, target):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only update your own profile",
        )

    changes = req.model_dump(exclude_unset=True)
    if "is_admin" in changes and not permissions.can_set_admin_flag(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can change admin status",
        )

    try:
        user = await user_manager.update_user(user_id, changes)
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return to_public(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a user")
async def delete_user(
    user_id: int,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Response:
    """Delete a user account.

    Content the user created (events, discussions, messages, ...) is kept.
    """
    target = await user_manager.get_user(user_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not permissions.can_delete_user(current_user, target):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You can not delete your own account",
        )
    await user_manager.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
