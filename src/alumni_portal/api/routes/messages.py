"""Direct messaging routes."""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from alumni_portal.api.routes.auth import get_current_user
from alumni_portal.core import permissions
from alumni_portal.core.dependencies import MessageManagerDep, UserManagerDep
from alumni_portal.schemas.message import (
    ConversationSummary,
    Message,
    MessageBase,
    MessageInsert,
)
from alumni_portal.schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Message"])


def _message_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")


def build_conversation_summaries(
    user_id: int, messages: List[Message]
) -> List[ConversationSummary]:
    """Group a user's messages into one inbox row per conversation partner.

    Args:
        user_id: The inbox owner.
        messages: Every message the user sent or received.

    Returns:
        Summaries ordered by their latest message, newest first.
    """
    latest: Dict[int, Message] = {}
    unread: Dict[int, int] = {}
    for message in messages:
        partner_id = (
            message.receiver_id if message.sender_id == user_id else message.sender_id
        )
        current = latest.get(partner_id)
        if current is None or (message.sent_at, message.id) > (current.sent_at, current.id):
            latest[partner_id] = message
        if message.receiver_id == user_id and not message.is_read:
            unread[partner_id] = unread.get(partner_id, 0) + 1

    summaries = [
        ConversationSummary(
            partner_id=partner_id,
            last_message=message,
            unread_count=unread.get(partner_id, 0),
        )
        for partner_id, message in latest.items()
    ]
    summaries.sort(
        key=lambda s: (s.last_message.sent_at, s.last_message.id), reverse=True
    )
    return summaries


@router.get("/messages", response_model=List[Message], summary="List my messages")
async def list_messages(
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[Message]:
    return await message_manager.get_messages_by_user(current_user.id)


@router.post(
    "/messages",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
)
async def send_message(
    req: MessageBase,
    message_manager: MessageManagerDep,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> Message:
    if req.receiver_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You can not send a message to yourself",
        )
    if await user_manager.get_user(req.receiver_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipient not found"
        )
    return await message_manager.create_message(
        MessageInsert(**req.model_dump(), sender_id=current_user.id)
    )


@router.get(
    "/conversations",
    response_model=List[ConversationSummary],
    summary="List my conversations",
)
async def list_conversations(
    message_manager: MessageManagerDep,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[ConversationSummary]:
    messages = await message_manager.get_messages_by_user(current_user.id)
    summaries = build_conversation_summaries(current_user.id, messages)
    for summary in summaries:
        partner = await user_manager.get_user(summary.partner_id)
        if partner is not None:
            summary.partner_name = f"{partner.first_name} {partner.last_name}"
    return summaries


@router.get(
    "/conversations/{user_id}",
    response_model=List[Message],
    summary="Open a conversation",
)
async def get_conversation(
    user_id: int,
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[Message]:
    """Return the conversation with a user and mark their messages read.

    Each unread message addressed to the caller is marked individually.
    """
    conversation = await message_manager.get_conversation(current_user.id, user_id)
    result = []
    for message in conversation:
        if message.receiver_id == current_user.id and not message.is_read:
            message = await message_manager.mark_message_as_read(message.id) or message
        result.append(message)
    return result


@router.put(
    "/messages/{message_id}/read",
    response_model=Message,
    summary="Mark a message as read",
)
async def mark_message_read(
    message_id: int,
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> Message:
    message = await message_manager.get_message(message_id)
    if message is None:
        raise _message_not_found()
    if not permissions.can_read_message(current_user, message):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the recipient can mark a message as read",
        )
    return await message_manager.mark_message_as_read(message_id)


@router.delete(
    "/messages/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a message",
)
async def delete_message(
    message_id: int,
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> Response:
    message = await message_manager.get_message(message_id)
    if message is None:
        raise _message_not_found()
    if not permissions.can_delete_message(current_user, message):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete messages you sent",
        )
    await message_manager.delete_message(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
