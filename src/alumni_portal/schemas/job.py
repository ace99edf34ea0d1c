"""Job posting schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from alumni_portal.schemas.base import CamelModel, UpdateStr
from alumni_portal.utils.clock import as_utc


class JobBase(CamelModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    application_process: str = Field(min_length=1)
    expires_at: Optional[datetime] = Field(
        default=None,
        description="A job without an expiry date stays active indefinitely.",
    )

    @field_validator("expires_at")
    @classmethod
    def _expires_at_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class JobInsert(JobBase):
    posted_by: int


class Job(JobInsert):
    id: int
    posted_at: datetime


class JobUpdate(CamelModel):
    title: UpdateStr = None
    company: UpdateStr = None
    location: UpdateStr = None
    description: UpdateStr = None
    requirements: UpdateStr = None
    application_process: UpdateStr = None
    expires_at: Optional[datetime] = None

    @field_validator("expires_at")
    @classmethod
    def _expires_at_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)
