"""Document review schemas."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from alumni_portal.schemas.base import CamelModel, UpdateStr, reject_null


class DocumentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentBase(CamelModel):
    title: str = Field(min_length=1)
    document_type: str = Field(
        min_length=1, description="resume, certificate, marksheet, etc."
    )
    file_url: str = Field(min_length=1)
    file_type: str = Field(min_length=1, description="pdf, jpg, jpeg, etc.")
    description: Optional[str] = None


class DocumentInsert(DocumentBase):
    user_id: int


class Document(DocumentInsert):
    id: int
    status: DocumentStatus = DocumentStatus.PENDING
    admin_feedback: Optional[str] = None
    uploaded_at: datetime
    updated_at: Optional[datetime] = None


class DocumentUpdate(CamelModel):
    """Owner edits plus the review fields, which only admins may set."""

    title: UpdateStr = None
    document_type: UpdateStr = None
    file_url: UpdateStr = None
    file_type: UpdateStr = None
    description: Optional[str] = None
    status: Annotated[Optional[DocumentStatus], BeforeValidator(reject_null)] = None
    admin_feedback: Optional[str] = None

    def content_changes(self) -> dict:
        return self.model_dump(
            exclude_unset=True, exclude={"status", "admin_feedback"}
        )

    def has_review_fields(self) -> bool:
        return bool({"status", "admin_feedback"} & self.model_fields_set)
