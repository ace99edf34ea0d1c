"""Event and event registration schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from alumni_portal.schemas.base import CamelModel, UpdateDatetime, UpdateStr
from alumni_portal.utils.clock import as_utc


class EventBase(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: datetime = Field(description="Start time. Events have no end time.")
    location: str = Field(min_length=1)

    @field_validator("date")
    @classmethod
    def _date_to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class EventInsert(EventBase):
    created_by: int


class Event(EventInsert):
    id: int
    image: Optional[str] = None


class EventUpdate(CamelModel):
    title: UpdateStr = None
    description: UpdateStr = None
    date: UpdateDatetime = None
    location: UpdateStr = None
    image: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _date_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class EventRegistrationInsert(CamelModel):
    event_id: int
    user_id: int


class EventRegistration(EventRegistrationInsert):
    id: int
    registered_at: datetime
