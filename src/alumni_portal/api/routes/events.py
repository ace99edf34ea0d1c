"""Event and event registration routes."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from alumni_portal.api.routes.auth import get_current_admin, get_current_user
from alumni_portal.core import permissions
from alumni_portal.core.dependencies import EventManagerDep
from alumni_portal.core.exceptions import AlreadyRegisteredError
from alumni_portal.schemas.event import (
    Event,
    EventBase,
    EventInsert,
    EventRegistration,
    EventUpdate,
)
from alumni_portal.schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["Event"])


def _event_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")


@router.get("", response_model=List[Event], summary="List events")
async def list_events(
    event_manager: EventManagerDep,
    upcoming: bool = False,
) -> List[Event]:
    if upcoming:
        return await event_manager.list_upcoming_events()
    return await event_manager.list_events()


@router.get(
    "/registrations",
    response_model=List[EventRegistration],
    summary="List a user's registrations",
)
async def list_user_registrations(
    event_manager: EventManagerDep,
    user_id: Optional[int] = Query(default=None, alias="userId"),
    current_user: User = Depends(get_current_user),
) -> List[EventRegistration]:
    """List the events a user registered for (the caller by default)."""
    target_id = current_user.id if user_id is None else user_id
    if not permissions.can_view_registrations(current_user, target_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own registrations",
        )
    return await event_manager.list_registrations_by_user(target_id)


@router.get("/{event_id}", response_model=Event, summary="Get an event")
async def get_event(event_id: int, event_manager: EventManagerDep) -> Event:
    event = await event_manager.get_event(event_id)
    if event is None:
        raise _event_not_found()
    return event


@router.post(
    "", response_model=Event, status_code=status.HTTP_201_CREATED, summary="Create an event"
)
async def create_event(
    req: EventBase,
    event_manager: EventManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Event:
    return await event_manager.create_event(
        EventInsert(**req.model_dump(), created_by=current_user.id)
    )


@router.put("/{event_id}", response_model=Event, summary="Update an event")
async def update_event(
    event_id: int,
    req: EventUpdate,
    event_manager: EventManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Event:
    event = await event_manager.update_event(event_id, req.model_dump(exclude_unset=True))
    if event is None:
        raise _event_not_found()
    return event


@router.delete(
    "/{event_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an event"
)
async def delete_event(
    event_id: int,
    event_manager: EventManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Response:
    """Delete an event, then the registrations made for it."""
    if not await event_manager.delete_event(event_id):
        raise _event_not_found()
    removed = await event_manager.delete_registrations_for_event(event_id)
    logger.info("Removed %d registrations of deleted event %s", removed, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{event_id}/registrations",
    response_model=List[EventRegistration],
    summary="List registrations for an event",
)
async def list_event_registrations(
    event_id: int,
    event_manager: EventManagerDep,
    current_user: User = Depends(get_current_admin),
) -> List[EventRegistration]:
    return await event_manager.list_registrations_by_event(event_id)


@router.post(
    "/{event_id}/register",
    response_model=EventRegistration,
    status_code=status.HTTP_201_CREATED,
    summary="Register for an event",
)
async def register_for_event(
    event_id: int,
    event_manager: EventManagerDep,
    current_user: User = Depends(get_current_user),
) -> EventRegistration:
    if await event_manager.get_event(event_id) is None:
        raise _event_not_found()
    try:
        return await event_manager.register_user(event_id, current_user.id)
    except AlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete(
    "/{event_id}/unregister",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel an event registration",
)
async def unregister_from_event(
    event_id: int,
    event_manager: EventManagerDep,
    current_user: User = Depends(get_current_user),
) -> Response:
    registration = await event_manager.find_registration(event_id, current_user.id)
    if registration is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found"
        )
    await event_manager.delete_registration(registration.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
