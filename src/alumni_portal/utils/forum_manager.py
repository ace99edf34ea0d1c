"""Discussion forum management.

This module keeps discussions and replies together with their bookkeeping:

- every discussion lists the stringified ids of its participants and keeps
  one ``DiscussionParticipant`` row per user who created it or replied;
- every reply carries a reaction map (label -> user ids) and a single
  ``is_read`` flag that flips the first time anyone reads it;
- ``ReplyReadStatus`` rows record, per user, which replies they have read
  and drive the unread counters.

The per-reply ``is_read`` flag and the per-user read receipts are two
different things and are deliberately kept apart.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from alumni_portal.schemas.forum import (
    Discussion,
    DiscussionInsert,
    DiscussionParticipant,
    Reply,
    ReplyInsert,
    ReplyReadStatus,
)
from alumni_portal.utils.clock import now_utc
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)


class ForumManager:
    """Manages discussions, replies, participants and read receipts."""

    def __init__(self, storage: MemStorage):
        """Initialize ForumManager.

        Args:
            storage: The application's MemStorage.
        """
        self.storage = storage

    # --- Discussions ---

    async def get_discussion(self, discussion_id: int) -> Optional[Discussion]:
        return self.storage.discussions.get(discussion_id)

    async def list_discussions(self) -> List[Discussion]:
        return self.storage.discussions.all()

    async def create_discussion(self, data: DiscussionInsert) -> Discussion:
        """Create a discussion and record its creator as first participant.

        Args:
            data: Title, content and creator of the discussion.

        Returns:
            The stored discussion.
        """
        now = now_utc()
        discussion = self.storage.discussions.insert(
            lambda discussion_id: Discussion(
                id=discussion_id,
                created_at=now,
                last_activity_at=now,
                participant_ids=[str(data.created_by)],
                is_locked=False,
                **data.model_dump(),
            )
        )
        await self.touch_participant(discussion.id, data.created_by, seen_at=now)
        logger.info("Created discussion: %s (id=%s)", discussion.title, discussion.id)
        return discussion

    async def update_discussion(
        self, discussion_id: int, changes: Dict[str, Any]
    ) -> Optional[Discussion]:
        return self.storage.discussions.update(discussion_id, changes)

    async def set_locked(self, discussion_id: int, is_locked: bool) -> Optional[Discussion]:
        discussion = self.storage.discussions.update(
            discussion_id, {"is_locked": is_locked}
        )
        if discussion is not None:
            logger.info(
                "%s discussion %s", "Locked" if is_locked else "Unlocked", discussion_id
            )
        return discussion

    async def delete_discussion(self, discussion_id: int) -> bool:
        """Delete only the discussion record; see the ``delete_*_for_*`` helpers."""
        deleted = self.storage.discussions.delete(discussion_id)
        if deleted:
            logger.info("Deleted discussion: %s", discussion_id)
        return deleted

    # --- Participants ---

    async def get_participant(
        self, discussion_id: int, user_id: int
    ) -> Optional[DiscussionParticipant]:
        return self.storage.discussion_participants.first(
            lambda p: p.discussion_id == discussion_id and p.user_id == user_id
        )

    async def list_participants(self, discussion_id: int) -> List[DiscussionParticipant]:
        return self.storage.discussion_participants.filter(
            lambda p: p.discussion_id == discussion_id
        )

    async def touch_participant(
        self,
        discussion_id: int,
        user_id: int,
        seen_at: Optional[datetime] = None,
    ) -> DiscussionParticipant:
        """Upsert the participant row of a user in a discussion.

        An existing row only has its ``last_seen_at`` refreshed; a row is
        never duplicated.
        """
        seen_at = seen_at or now_utc()
        existing = await self.get_participant(discussion_id, user_id)
        if existing is not None:
            return self.storage.discussion_participants.update(
                existing.id, {"last_seen_at": seen_at}
            )
        return self.storage.discussion_participants.insert(
            lambda participant_id: DiscussionParticipant(
                id=participant_id,
                discussion_id=discussion_id,
                user_id=user_id,
                joined_at=seen_at,
                last_seen_at=seen_at,
            )
        )

    async def delete_participants_for_discussion(self, discussion_id: int) -> int:
        return self.storage.discussion_participants.delete_where(
            lambda p: p.discussion_id == discussion_id
        )

    # --- Replies ---

    async def get_reply(self, reply_id: int) -> Optional[Reply]:
        return self.storage.replies.get(reply_id)

    async def list_replies(self) -> List[Reply]:
        return self.storage.replies.all()

    async def list_replies_by_discussion(self, discussion_id: int) -> List[Reply]:
        return self.storage.replies.filter(lambda r: r.discussion_id == discussion_id)

    async def create_reply(self, data: ReplyInsert) -> Reply:
        """Add a reply and update the bookkeeping of its discussion.

        The discussion's ``last_activity_at`` moves to the reply's creation
        time and the replier becomes (or is refreshed as) a participant.

        Args:
            data: Content, discussion and author of the reply.

        Returns:
            The stored reply.
        """
        reply = self.storage.replies.insert(
            lambda reply_id: Reply(
                id=reply_id,
                created_at=now_utc(),
                is_read=False,
                reactions={},
                **data.model_dump(),
            )
        )

        discussion = self.storage.discussions.get(data.discussion_id)
        if discussion is not None:
            changes: Dict[str, Any] = {"last_activity_at": reply.created_at}
            participant_key = str(data.created_by)
            if participant_key not in discussion.participant_ids:
                changes["participant_ids"] = [*discussion.participant_ids, participant_key]
            self.storage.discussions.update(discussion.id, changes)
        else:
            logger.warning(
                "Reply %s added to unknown discussion %s", reply.id, data.discussion_id
            )

        await self.touch_participant(
            data.discussion_id, data.created_by, seen_at=reply.created_at
        )
        logger.info("Created reply %s in discussion %s", reply.id, reply.discussion_id)
        return reply

    async def update_reply(self, reply_id: int, changes: Dict[str, Any]) -> Optional[Reply]:
        return self.storage.replies.update(reply_id, changes)

    async def delete_reply(self, reply_id: int) -> bool:
        deleted = self.storage.replies.delete(reply_id)
        if deleted:
            logger.info("Deleted reply: %s", reply_id)
        return deleted

    async def delete_replies_for_discussion(self, discussion_id: int) -> List[int]:
        """Delete every reply of a discussion and return their ids."""
        reply_ids = [r.id for r in await self.list_replies_by_discussion(discussion_id)]
        for reply_id in reply_ids:
            self.storage.replies.delete(reply_id)
        return reply_ids

    # --- Reactions ---

    async def add_reaction(self, reply_id: int, user_id: int, label: str) -> Optional[Reply]:
        """Add a user's reaction to a reply. Adding it twice changes nothing."""
        reply = self.storage.replies.get(reply_id)
        if reply is None:
            return None
        reactions = {key: list(users) for key, users in reply.reactions.items()}
        users = reactions.setdefault(label, [])
        if user_id not in users:
            users.append(user_id)
        return self.storage.replies.update(reply_id, {"reactions": reactions})

    async def remove_reaction(
        self, reply_id: int, user_id: int, label: str
    ) -> Optional[Reply]:
        """Remove a user's reaction, dropping the label once nobody uses it."""
        reply = self.storage.replies.get(reply_id)
        if reply is None:
            return None
        reactions = {key: list(users) for key, users in reply.reactions.items()}
        users = reactions.get(label)
        if users is not None:
            if user_id in users:
                users.remove(user_id)
            if not users:
                del reactions[label]
        return self.storage.replies.update(reply_id, {"reactions": reactions})

    # --- Read receipts ---

    async def get_read_status(self, reply_id: int, user_id: int) -> Optional[ReplyReadStatus]:
        return self.storage.reply_read_statuses.first(
            lambda s: s.reply_id == reply_id and s.user_id == user_id
        )

    async def list_read_statuses(self, user_id: int) -> List[ReplyReadStatus]:
        return self.storage.reply_read_statuses.filter(lambda s: s.user_id == user_id)

    async def mark_reply_as_read(self, reply_id: int, user_id: int) -> Optional[ReplyReadStatus]:
        """Record that a user has read a reply.

        Idempotent: an existing receipt is returned unchanged. The first
        receipt also sets the reply's global ``is_read`` flag, whoever the
        reader is.

        Returns:
            The read receipt, or None if the reply does not exist.
        """
        if self.storage.replies.get(reply_id) is None:
            return None

        existing = await self.get_read_status(reply_id, user_id)
        if existing is not None:
            return existing

        status = self.storage.reply_read_statuses.insert(
            lambda status_id: ReplyReadStatus(
                id=status_id, reply_id=reply_id, user_id=user_id, read_at=now_utc()
            )
        )
        self.storage.replies.update(reply_id, {"is_read": True})
        logger.debug("User %s read reply %s", user_id, reply_id)
        return status

    async def get_unread_replies_count(self, discussion_id: int, user_id: int) -> int:
        """Count the replies of a discussion the user has not read yet.

        The user's own replies never count as unread.
        """
        read_reply_ids = {s.reply_id for s in await self.list_read_statuses(user_id)}
        return sum(
            1
            for reply in await self.list_replies_by_discussion(discussion_id)
            if reply.created_by != user_id and reply.id not in read_reply_ids
        )

    async def delete_read_statuses_for_reply(self, reply_id: int) -> int:
        return self.storage.reply_read_statuses.delete_where(
            lambda s: s.reply_id == reply_id
        )
