"""In-memory record storage.

This module holds every collection of the portal in process memory. Each
entity type lives in its own ``Table``: a mapping from an auto-incrementing
integer id to a pydantic record. Nothing is persisted; the data lives as long
as the ``MemStorage`` instance that owns it.
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from pydantic import BaseModel

from alumni_portal.schemas.document import Document
from alumni_portal.schemas.event import Event, EventRegistration
from alumni_portal.schemas.forum import (
    Discussion,
    DiscussionParticipant,
    Reply,
    ReplyReadStatus,
)
from alumni_portal.schemas.gallery import Gallery, GalleryImage
from alumni_portal.schemas.job import Job
from alumni_portal.schemas.message import Message
from alumni_portal.schemas.university import UniversityInfo
from alumni_portal.schemas.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Table(Generic[T]):
    """A collection of records keyed by a monotonic integer id.

    Ids start at 1 and are never reused, even after the record holding one
    has been deleted.
    """

    def __init__(self, name: str):
        self.name = name
        self._rows: Dict[int, T] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._rows

    def insert(self, build: Callable[[int], T]) -> T:
        """Store the record built for the next id.

        Args:
            build: Called with the assigned id; returns the complete record.

        Returns:
            The stored record.
        """
        record_id = self._next_id
        self._next_id += 1
        record = build(record_id)
        self._rows[record_id] = record
        return record

    def get(self, record_id: int) -> Optional[T]:
        return self._rows.get(record_id)

    def update(self, record_id: int, changes: Mapping[str, Any]) -> Optional[T]:
        """Shallow-merge ``changes`` into a record.

        No field is validated and the id can not be overwritten.

        Returns:
            The merged record, or None if the id is unknown.
        """
        record = self._rows.get(record_id)
        if record is None:
            return None
        changes = {key: value for key, value in changes.items() if key != "id"}
        updated = record.model_copy(update=changes)
        self._rows[record_id] = updated
        return updated

    def delete(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None

    def all(self) -> List[T]:
        return list(self._rows.values())

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [row for row in self._rows.values() if predicate(row)]

    def first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for row in self._rows.values():
            if predicate(row):
                return row
        return None

    def delete_where(self, predicate: Callable[[T], bool]) -> int:
        """Delete every matching record and return how many were removed."""
        doomed = [record_id for record_id, row in self._rows.items() if predicate(row)]
        for record_id in doomed:
            del self._rows[record_id]
        return len(doomed)


class MemStorage:
    """All collections of the portal.

    One instance is built per application and handed to the managers through
    FastAPI dependencies, so tests can run against a fresh store each time.
    """

    def __init__(self):
        self.users: Table[User] = Table("users")
        self.events: Table[Event] = Table("events")
        self.event_registrations: Table[EventRegistration] = Table("event_registrations")
        self.jobs: Table[Job] = Table("jobs")
        self.galleries: Table[Gallery] = Table("galleries")
        self.gallery_images: Table[GalleryImage] = Table("gallery_images")
        self.discussions: Table[Discussion] = Table("discussions")
        self.discussion_participants: Table[DiscussionParticipant] = Table(
            "discussion_participants"
        )
        self.replies: Table[Reply] = Table("replies")
        self.reply_read_statuses: Table[ReplyReadStatus] = Table("reply_read_statuses")
        self.documents: Table[Document] = Table("documents")
        self.messages: Table[Message] = Table("messages")

        # Singleton; created by the startup seed, then mutated in place
        self.university_info: Optional[UniversityInfo] = None

        logger.debug("Initialized in-memory storage")
