"""Discussion forum schema definitions.

This module defines discussions, replies and the per-user bookkeeping rows
(participants and reply read receipts) kept alongside them.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from alumni_portal.schemas.base import CamelModel, UpdateStr


class DiscussionBase(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class DiscussionInsert(DiscussionBase):
    created_by: int


class Discussion(DiscussionInsert):
    id: int
    created_at: datetime
    last_activity_at: datetime = Field(
        description="Bumped whenever a reply is created."
    )
    participant_ids: List[str] = Field(
        default_factory=list,
        description="Stringified ids of users who created or replied.",
    )
    is_locked: bool = False


class DiscussionUpdate(CamelModel):
    title: UpdateStr = None
    content: UpdateStr = None


class LockRequest(CamelModel):
    is_locked: bool


class DiscussionParticipant(CamelModel):
    id: int
    discussion_id: int
    user_id: int
    joined_at: datetime
    last_seen_at: datetime


class ReplyBase(CamelModel):
    content: str = Field(min_length=1)


class ReplyInsert(ReplyBase):
    discussion_id: int
    created_by: int


class Reply(ReplyInsert):
    id: int
    created_at: datetime
    is_read: bool = Field(
        default=False,
        description="Set the first time any user reads the reply.",
    )
    reactions: Dict[str, List[int]] = Field(
        default_factory=dict,
        description="Reaction label -> ids of users who reacted with it.",
    )


class ReplyUpdate(CamelModel):
    content: UpdateStr = None


class ReactionRequest(CamelModel):
    reaction: str = Field(min_length=1, max_length=32)


class ReplyReadStatus(CamelModel):
    id: int
    reply_id: int
    user_id: int
    read_at: datetime


class UnreadCount(CamelModel):
    discussion_id: int
    unread_count: int
