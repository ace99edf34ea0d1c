"""Direct message management.

A conversation is not stored: it is derived on read from the messages whose
sender and receiver are the two users, in either direction.
"""

import logging
from typing import Any, Dict, List, Optional

from alumni_portal.schemas.message import Message, MessageInsert
from alumni_portal.utils.clock import now_utc
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)


class MessageManager:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def get_message(self, message_id: int) -> Optional[Message]:
        return self.storage.messages.get(message_id)

    async def create_message(self, data: MessageInsert) -> Message:
        message = self.storage.messages.insert(
            lambda message_id: Message(
                id=message_id, is_read=False, sent_at=now_utc(), **data.model_dump()
            )
        )
        logger.info(
            "Message %s sent from %s to %s",
            message.id,
            message.sender_id,
            message.receiver_id,
        )
        return message

    async def update_message(
        self, message_id: int, changes: Dict[str, Any]
    ) -> Optional[Message]:
        return self.storage.messages.update(message_id, changes)

    async def mark_message_as_read(self, message_id: int) -> Optional[Message]:
        return self.storage.messages.update(message_id, {"is_read": True})

    async def delete_message(self, message_id: int) -> bool:
        deleted = self.storage.messages.delete(message_id)
        if deleted:
            logger.info("Deleted message: %s", message_id)
        return deleted

    async def get_messages_by_user(self, user_id: int) -> List[Message]:
        """Every message the user sent or received, unsorted."""
        return self.storage.messages.filter(
            lambda m: m.sender_id == user_id or m.receiver_id == user_id
        )

    async def get_conversation(self, user_a: int, user_b: int) -> List[Message]:
        """Messages exchanged between two users, oldest first.

        Ties on ``sent_at`` are broken by id, so the result does not depend
        on the order of the arguments.
        """
        directions = ((user_a, user_b), (user_b, user_a))
        messages = self.storage.messages.filter(
            lambda m: (m.sender_id, m.receiver_id) in directions
        )
        return sorted(messages, key=lambda m: (m.sent_at, m.id))
