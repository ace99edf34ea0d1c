"""Discussion forum routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from alumni_portal.api.routes.auth import get_current_user
from alumni_portal.core import permissions
from alumni_portal.core.dependencies import ForumManagerDep
from alumni_portal.schemas.forum import (
    Discussion,
    DiscussionBase,
    DiscussionInsert,
    DiscussionParticipant,
    DiscussionUpdate,
    LockRequest,
    ReactionRequest,
    Reply,
    ReplyBase,
    ReplyInsert,
    ReplyReadStatus,
    ReplyUpdate,
    UnreadCount,
)
from alumni_portal.schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Forum"])


def _discussion_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Discussion not found")


def _reply_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reply not found")


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


# --- Discussions ---


@router.get("/discussions", response_model=List[Discussion], summary="List discussions")
async def list_discussions(forum_manager: ForumManagerDep) -> List[Discussion]:
    return await forum_manager.list_discussions()


@router.get(
    "/discussions/{discussion_id}", response_model=Discussion, summary="Get a discussion"
)
async def get_discussion(discussion_id: int, forum_manager: ForumManagerDep) -> Discussion:
    discussion = await forum_manager.get_discussion(discussion_id)
    if discussion is None:
        raise _discussion_not_found()
    return discussion


@router.post(
    "/discussions",
    response_model=Discussion,
    status_code=status.HTTP_201_CREATED,
    summary="Start a discussion",
)
async def create_discussion(
    req: DiscussionBase,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Discussion:
    return await forum_manager.create_discussion(
        DiscussionInsert(**req.model_dump(), created_by=current_user.id)
    )


@router.put(
    "/discussions/{discussion_id}", response_model=Discussion, summary="Edit a discussion"
)
async def update_discussion(
    discussion_id: int,
    req: DiscussionUpdate,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Discussion:
    discussion = await forum_manager.get_discussion(discussion_id)
    if discussion is None:
        raise _discussion_not_found()
    if not permissions.can_edit_discussion(current_user, discussion):
        raise _forbidden("Forbidden: You can only update your own discussions")
    return await forum_manager.update_discussion(
        discussion_id, req.model_dump(exclude_unset=True)
    )


@router.patch(
    "/discussions/{discussion_id}/lock",
    response_model=Discussion,
    summary="Lock or unlock a discussion",
)
async def lock_discussion(
    discussion_id: int,
    req: LockRequest,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Discussion:
    if not permissions.can_lock_discussion(current_user):
        logger.warning("User %s tried to lock discussion %s", current_user.id, discussion_id)
        raise _forbidden("Forbidden: Admin access required")
    discussion = await forum_manager.set_locked(discussion_id, req.is_locked)
    if discussion is None:
        raise _discussion_not_found()
    return discussion


@router.delete(
    "/discussions/{discussion_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a discussion",
)
async def delete_discussion(
    discussion_id: int,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Response:
    """Delete a discussion, then its replies, read receipts and participants."""
    discussion = await forum_manager.get_discussion(discussion_id)
    if discussion is None:
        raise _discussion_not_found()
    if not permissions.can_edit_discussion(current_user, discussion):
        raise _forbidden("Forbidden: You can only delete your own discussions")

    await forum_manager.delete_discussion(discussion_id)
    for reply_id in await forum_manager.delete_replies_for_discussion(discussion_id):
        await forum_manager.delete_read_statuses_for_reply(reply_id)
    await forum_manager.delete_participants_for_discussion(discussion_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/discussions/{discussion_id}/participants",
    response_model=List[DiscussionParticipant],
    summary="List discussion participants",
)
async def list_participants(
    discussion_id: int,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[DiscussionParticipant]:
    if await forum_manager.get_discussion(discussion_id) is None:
        raise _discussion_not_found()
    return await forum_manager.list_participants(discussion_id)


@router.get(
    "/discussions/{discussion_id}/unread-count",
    response_model=UnreadCount,
    summary="Count unread replies",
)
async def get_unread_count(
    discussion_id: int,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> UnreadCount:
    if await forum_manager.get_discussion(discussion_id) is None:
        raise _discussion_not_found()
    count = await forum_manager.get_unread_replies_count(discussion_id, current_user.id)
    return UnreadCount(discussion_id=discussion_id, unread_count=count)


# --- Replies ---


@router.get(
    "/discussions/{discussion_id}/replies",
    response_model=List[Reply],
    summary="List replies of a discussion",
)
async def list_discussion_replies(
    discussion_id: int, forum_manager: ForumManagerDep
) -> List[Reply]:
    return await forum_manager.list_replies_by_discussion(discussion_id)


@router.post(
    "/discussions/{discussion_id}/replies",
    response_model=Reply,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to a discussion",
)
async def create_reply(
    discussion_id: int,
    req: ReplyBase,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Reply:
    discussion = await forum_manager.get_discussion(discussion_id)
    if discussion is None:
        raise _discussion_not_found()
    if not permissions.can_reply(current_user, discussion):
        raise _forbidden("Discussion is locked")
    return await forum_manager.create_reply(
        ReplyInsert(
            **req.model_dump(), discussion_id=discussion_id, created_by=current_user.id
        )
    )


@router.get("/replies", response_model=List[Reply], summary="List all replies")
async def list_replies(forum_manager: ForumManagerDep) -> List[Reply]:
    return await forum_manager.list_replies()


@router.put("/replies/{reply_id}", response_model=Reply, summary="Edit a reply")
async def update_reply(
    reply_id: int,
    req: ReplyUpdate,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Reply:
    reply = await forum_manager.get_reply(reply_id)
    if reply is None:
        raise _reply_not_found()
    discussion = await forum_manager.get_discussion(reply.discussion_id)
    if not permissions.can_edit_reply(current_user, reply, discussion):
        if reply.created_by == current_user.id:
            raise _forbidden("Discussion is locked")
        raise _forbidden("Forbidden: You can only update your own replies")
    return await forum_manager.update_reply(reply_id, req.model_dump(exclude_unset=True))


@router.delete(
    "/replies/{reply_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a reply"
)
async def delete_reply(
    reply_id: int,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Response:
    reply = await forum_manager.get_reply(reply_id)
    if reply is None:
        raise _reply_not_found()
    if not permissions.can_delete_reply(current_user, reply):
        raise _forbidden("Forbidden: You can only delete your own replies")
    await forum_manager.delete_reply(reply_id)
    await forum_manager.delete_read_statuses_for_reply(reply_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/replies/{reply_id}/reactions", response_model=Reply, summary="React to a reply"
)
async def add_reaction(
    reply_id: int,
    req: ReactionRequest,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Reply:
    reply = await forum_manager.add_reaction(reply_id, current_user.id, req.reaction)
    if reply is None:
        raise _reply_not_found()
    return reply


@router.delete(
    "/replies/{reply_id}/reactions/{reaction}",
    response_model=Reply,
    summary="Remove a reaction",
)
async def remove_reaction(
    reply_id: int,
    reaction: str,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> Reply:
    reply = await forum_manager.remove_reaction(reply_id, current_user.id, reaction)
    if reply is None:
        raise _reply_not_found()
    return reply


@router.post(
    "/replies/{reply_id}/read",
    response_model=ReplyReadStatus,
    summary="Mark a reply as read",
)
async def mark_reply_read(
    reply_id: int,
    forum_manager: ForumManagerDep,
    current_user: User = Depends(get_current_user),
) -> ReplyReadStatus:
    read_status = await forum_manager.mark_reply_as_read(reply_id, current_user.id)
    if read_status is None:
        raise _reply_not_found()
    return read_status
