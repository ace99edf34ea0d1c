"""Direct message schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from alumni_portal.schemas.base import CamelModel


class MessageBase(CamelModel):
    receiver_id: int
    content: str = Field(min_length=1)


class MessageInsert(MessageBase):
    sender_id: int


class Message(MessageInsert):
    id: int
    is_read: bool = False
    sent_at: datetime


class ConversationSummary(CamelModel):
    """One row of the inbox: the latest message exchanged with a partner."""

    partner_id: int
    last_message: Message
    unread_count: int = 0
    partner_name: Optional[str] = None
