"""University information schemas."""

from datetime import datetime
from typing import Optional

from alumni_portal.schemas.base import CamelModel, UpdateStr


class UniversityInfoFields(CamelModel):
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None

    # Social media links
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    twitter_url: Optional[str] = None
    instagram_url: Optional[str] = None
    youtube_url: Optional[str] = None

    description: Optional[str] = None
    vision_statement: Optional[str] = None
    mission_statement: Optional[str] = None


class UniversityInfo(UniversityInfoFields):
    id: int = 1
    name: str
    updated_at: datetime
    updated_by: int


class UniversityInfoUpdate(UniversityInfoFields):
    name: UpdateStr = None
