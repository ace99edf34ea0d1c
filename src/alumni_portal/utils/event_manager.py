"""Event and event registration management."""

import logging
from typing import Any, Dict, List, Optional

from alumni_portal.core.exceptions import AlreadyRegisteredError
from alumni_portal.schemas.event import (
    Event,
    EventInsert,
    EventRegistration,
    EventRegistrationInsert,
)
from alumni_portal.utils.clock import now_utc
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)


class EventManager:
    """Manages events and the registrations made for them."""

    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def get_event(self, event_id: int) -> Optional[Event]:
        return self.storage.events.get(event_id)

    async def list_events(self) -> List[Event]:
        return self.storage.events.all()

    async def list_upcoming_events(self) -> List[Event]:
        """Events whose date is still in the future."""
        now = now_utc()
        return self.storage.events.filter(lambda e: e.date > now)

    async def create_event(self, data: EventInsert) -> Event:
        event = self.storage.events.insert(
            lambda event_id: Event(id=event_id, image=None, **data.model_dump())
        )
        logger.info("Created event: %s (id=%s)", event.title, event.id)
        return event

    async def update_event(self, event_id: int, changes: Dict[str, Any]) -> Optional[Event]:
        return self.storage.events.update(event_id, changes)

    async def delete_event(self, event_id: int) -> bool:
        deleted = self.storage.events.delete(event_id)
        if deleted:
            logger.info("Deleted event: %s", event_id)
        return deleted

    # --- Registrations ---

    async def get_registration(self, registration_id: int) -> Optional[EventRegistration]:
        return self.storage.event_registrations.get(registration_id)

    async def list_registrations_by_event(self, event_id: int) -> List[EventRegistration]:
        return self.storage.event_registrations.filter(lambda r: r.event_id == event_id)

    async def list_registrations_by_user(self, user_id: int) -> List[EventRegistration]:
        return self.storage.event_registrations.filter(lambda r: r.user_id == user_id)

    async def find_registration(
        self, event_id: int, user_id: int
    ) -> Optional[EventRegistration]:
        return self.storage.event_registrations.first(
            lambda r: r.event_id == event_id and r.user_id == user_id
        )

    async def create_registration(self, data: EventRegistrationInsert) -> EventRegistration:
        """Store a registration without checking for duplicates."""
        return self.storage.event_registrations.insert(
            lambda registration_id: EventRegistration(
                id=registration_id, registered_at=now_utc(), **data.model_dump()
            )
        )

    async def register_user(self, event_id: int, user_id: int) -> EventRegistration:
        """Register a user for an event once.

        The duplicate check and the insert are separate store calls.

        Raises:
            AlreadyRegisteredError: If the user is already registered.
        """
        if await self.find_registration(event_id, user_id):
            raise AlreadyRegisteredError(event_id, user_id)
        registration = await self.create_registration(
            EventRegistrationInsert(event_id=event_id, user_id=user_id)
        )
        logger.info("User %s registered for event %s", user_id, event_id)
        return registration

    async def delete_registration(self, registration_id: int) -> bool:
        return self.storage.event_registrations.delete(registration_id)

    async def delete_registrations_for_event(self, event_id: int) -> int:
        return self.storage.event_registrations.delete_where(
            lambda r: r.event_id == event_id
        )
