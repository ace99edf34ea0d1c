import pytest

from alumni_portal.schemas.forum import DiscussionInsert, ReplyInsert
from alumni_portal.utils.forum_manager import ForumManager


async def _start_discussion(forum_manager: ForumManager, created_by: int = 1):
    return await forum_manager.create_discussion(
        DiscussionInsert(title='Placements 2024', content='Share your offers', created_by=created_by)
    )


async def _reply(forum_manager: ForumManager, discussion_id: int, created_by: int, content: str = 'Congrats!'):
    return await forum_manager.create_reply(
        ReplyInsert(content=content, discussion_id=discussion_id, created_by=created_by)
    )


@pytest.mark.asyncio
async def test_create_discussion_registers_creator(forum_manager: ForumManager):
    discussion = await _start_discussion(forum_manager, created_by=1)

    assert discussion.participant_ids == ['1']
    assert discussion.is_locked is False
    assert discussion.last_activity_at == discussion.created_at

    participants = await forum_manager.list_participants(discussion.id)
    assert [p.user_id for p in participants] == [1]


@pytest.mark.asyncio
async def test_reply_updates_discussion_bookkeeping(forum_manager: ForumManager):
    """Test a reply bumps activity and adds the replier as participant"""
    discussion = await _start_discussion(forum_manager, created_by=1)

    reply = await _reply(forum_manager, discussion.id, created_by=2)

    updated = await forum_manager.get_discussion(discussion.id)
    assert updated.last_activity_at == reply.created_at
    assert updated.last_activity_at >= updated.created_at
    assert updated.participant_ids == ['1', '2']
    assert reply.is_read is False
    assert reply.reactions == {}


@pytest.mark.asyncio
async def test_participants_are_not_duplicated(forum_manager: ForumManager):
    """Test repeated replies refresh one participant row"""
    discussion = await _start_discussion(forum_manager, created_by=1)

    await _reply(forum_manager, discussion.id, created_by=2)
    first_seen = (await forum_manager.get_participant(discussion.id, 2)).last_seen_at
    second = await _reply(forum_manager, discussion.id, created_by=2)
    await _reply(forum_manager, discussion.id, created_by=1)

    participants = await forum_manager.list_participants(discussion.id)
    assert sorted(p.user_id for p in participants) == [1, 2]
    replier = await forum_manager.get_participant(discussion.id, 2)
    assert replier.last_seen_at == second.created_at
    assert replier.last_seen_at >= first_seen
    assert (await forum_manager.get_discussion(discussion.id)).participant_ids == ['1', '2']


@pytest.mark.asyncio
async def test_unread_count_follows_read_receipts(forum_manager: ForumManager):
    discussion = await _start_discussion(forum_manager, created_by=1)
    reply = await _reply(forum_manager, discussion.id, created_by=2)

    assert await forum_manager.get_unread_replies_count(discussion.id, 1) == 1
    # A user's own replies are never unread for them
    assert await forum_manager.get_unread_replies_count(discussion.id, 2) == 0

    status = await forum_manager.mark_reply_as_read(reply.id, 1)

    assert status.reply_id == reply.id
    assert status.user_id == 1
    assert await forum_manager.get_unread_replies_count(discussion.id, 1) == 0
    assert (await forum_manager.get_reply(reply.id)).is_read is True


@pytest.mark.asyncio
async def test_mark_reply_as_read_is_idempotent(forum_manager: ForumManager):
    discussion = await _start_discussion(forum_manager)
    reply = await _reply(forum_manager, discussion.id, created_by=2)

    first = await forum_manager.mark_reply_as_read(reply.id, 1)
    second = await forum_manager.mark_reply_as_read(reply.id, 1)

    assert first == second
    assert len(await forum_manager.list_read_statuses(1)) == 1


@pytest.mark.asyncio
async def test_read_flag_is_global_but_receipts_are_per_user(forum_manager: ForumManager):
    """Test one reader flips is_read while others keep their unread count"""
    discussion = await _start_discussion(forum_manager, created_by=1)
    reply = await _reply(forum_manager, discussion.id, created_by=2)

    await forum_manager.mark_reply_as_read(reply.id, 3)

    assert (await forum_manager.get_reply(reply.id)).is_read is True
    assert await forum_manager.get_unread_replies_count(discussion.id, 1) == 1


@pytest.mark.asyncio
async def test_mark_unknown_reply_as_read(forum_manager: ForumManager):
    assert await forum_manager.mark_reply_as_read(42, 1) is None
    assert await forum_manager.list_read_statuses(1) == []


@pytest.mark.asyncio
async def test_reactions(forum_manager: ForumManager):
    discussion = await _start_discussion(forum_manager)
    reply = await _reply(forum_manager, discussion.id, created_by=2)

    await forum_manager.add_reaction(reply.id, 1, 'like')
    reacted = await forum_manager.add_reaction(reply.id, 1, 'like')
    assert reacted.reactions == {'like': [1]}

    reacted = await forum_manager.add_reaction(reply.id, 3, 'like')
    assert reacted.reactions == {'like': [1, 3]}

    await forum_manager.remove_reaction(reply.id, 1, 'like')
    removed = await forum_manager.remove_reaction(reply.id, 3, 'like')
    assert removed.reactions == {}

    assert await forum_manager.add_reaction(99, 1, 'like') is None


@pytest.mark.asyncio
async def test_reaction_maps_are_not_shared(forum_manager: ForumManager):
    """Test an earlier snapshot of a reply is not mutated by later reactions"""
    discussion = await _start_discussion(forum_manager)
    reply = await _reply(forum_manager, discussion.id, created_by=2)

    before = await forum_manager.add_reaction(reply.id, 1, 'like')
    await forum_manager.add_reaction(reply.id, 3, 'like')

    assert before.reactions == {'like': [1]}


@pytest.mark.asyncio
async def test_lock_and_update_discussion(forum_manager: ForumManager):
    discussion = await _start_discussion(forum_manager)

    locked = await forum_manager.set_locked(discussion.id, True)
    assert locked.is_locked is True

    updated = await forum_manager.update_discussion(discussion.id, {'title': 'Placements 2025'})
    assert updated.title == 'Placements 2025'
    assert updated.is_locked is True
    assert await forum_manager.set_locked(99, True) is None


@pytest.mark.asyncio
async def test_discussion_cleanup_helpers(forum_manager: ForumManager):
    discussion = await _start_discussion(forum_manager, created_by=1)
    other = await _start_discussion(forum_manager, created_by=1)
    first = await _reply(forum_manager, discussion.id, created_by=2)
    second = await _reply(forum_manager, discussion.id, created_by=3)
    kept = await _reply(forum_manager, other.id, created_by=2)
    await forum_manager.mark_reply_as_read(first.id, 1)
    await forum_manager.mark_reply_as_read(kept.id, 1)

    assert await forum_manager.delete_discussion(discussion.id) is True
    deleted_ids = await forum_manager.delete_replies_for_discussion(discussion.id)
    for reply_id in deleted_ids:
        await forum_manager.delete_read_statuses_for_reply(reply_id)
    removed = await forum_manager.delete_participants_for_discussion(discussion.id)

    assert deleted_ids == [first.id, second.id]
    assert removed == 3
    assert [r.id for r in await forum_manager.list_replies()] == [kept.id]
    assert [s.reply_id for s in await forum_manager.list_read_statuses(1)] == [kept.id]
    assert len(await forum_manager.list_participants(other.id)) == 2
