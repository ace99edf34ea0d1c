"""Photo gallery schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from alumni_portal.schemas.base import CamelModel, UpdateStr


class GalleryBase(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None


class GalleryInsert(GalleryBase):
    created_by: int


class Gallery(GalleryInsert):
    id: int
    created_at: datetime


class GalleryUpdate(CamelModel):
    title: UpdateStr = None
    description: Optional[str] = None


class GalleryImageBase(CamelModel):
    image_url: str = Field(
        min_length=1,
        description="A remote URL or an embedded data URL.",
    )
    caption: Optional[str] = None


class GalleryImageInsert(GalleryImageBase):
    gallery_id: int
    uploaded_by: int


class GalleryImage(GalleryImageInsert):
    id: int
    uploaded_at: datetime


class GalleryImageUpdate(CamelModel):
    image_url: UpdateStr = None
    caption: Optional[str] = None
