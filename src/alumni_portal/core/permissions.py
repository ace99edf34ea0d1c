"""Authorization policy.

Every check is a plain function of the acting user (None when the request is
anonymous) and the resource involved, so the policy can be tested without
going through HTTP. Routes call these and turn a False into a 401 or 403.
"""

from typing import Optional

from alumni_portal.schemas.document import Document
from alumni_portal.schemas.forum import Discussion, Reply
from alumni_portal.schemas.message import Message
from alumni_portal.schemas.user import User


def is_authenticated(user: Optional[User]) -> bool:
    return user is not None


def is_admin(user: Optional[User]) -> bool:
    return user is not None and user.is_admin


def _is_owner_or_admin(user: Optional[User], owner_id: int) -> bool:
    return user is not None and (user.id == owner_id or user.is_admin)


# --- Users ---

def can_edit_user(user: Optional[User], target: User) -> bool:
    return _is_owner_or_admin(user, target.id)


def can_set_admin_flag(user: Optional[User]) -> bool:
    return is_admin(user)


def can_delete_user(user: Optional[User], target: User) -> bool:
    # Admins can not delete their own account
    return is_admin(user) and user.id != target.id


def can_view_registrations(user: Optional[User], user_id: int) -> bool:
    return _is_owner_or_admin(user, user_id)


# --- Forum ---

def can_edit_discussion(user: Optional[User], discussion: Discussion) -> bool:
    return _is_owner_or_admin(user, discussion.created_by)


def can_lock_discussion(user: Optional[User]) -> bool:
    return is_admin(user)


def can_reply(user: Optional[User], discussion: Discussion) -> bool:
    """Locked discussions only accept replies from admins."""
    if user is None:
        return False
    return not discussion.is_locked or user.is_admin


def can_edit_reply(user: Optional[User], reply: Reply, discussion: Optional[Discussion]) -> bool:
    if not _is_owner_or_admin(user, reply.created_by):
        return False
    locked = discussion is not None and discussion.is_locked
    return not locked or user.is_admin


def can_delete_reply(user: Optional[User], reply: Reply) -> bool:
    return _is_owner_or_admin(user, reply.created_by)


# --- Documents ---

def can_view_document(user: Optional[User], document: Document) -> bool:
    return _is_owner_or_admin(user, document.user_id)


def can_edit_document(user: Optional[User], document: Document) -> bool:
    return _is_owner_or_admin(user, document.user_id)


def can_review_document(user: Optional[User]) -> bool:
    return is_admin(user)


# --- Messages ---

def can_delete_message(user: Optional[User], message: Message) -> bool:
    return _is_owner_or_admin(user, message.sender_id)


def can_read_message(user: Optional[User], message: Message) -> bool:
    """Only the receiver marks a message as read."""
    return user is not None and user.id == message.receiver_id
