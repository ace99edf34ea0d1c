import pytest

from alumni_portal.core.exceptions import UserAlreadyExistsError, ValidationError
from alumni_portal.schemas.user import UserInsert
from alumni_portal.utils.user_manager import UserManager


def test_password_hash_round_trip(user_manager: UserManager):
    hashed = user_manager.hash_password('s3cret-pass')

    assert hashed != 's3cret-pass'
    assert user_manager.verify_password('s3cret-pass', hashed)
    assert not user_manager.verify_password('wrong-pass', hashed)


def test_verify_password_with_malformed_hash(user_manager: UserManager):
    """Test a corrupt hash is reported as a mismatch"""
    assert user_manager.verify_password('anything', 'not-a-bcrypt-hash') is False


def test_long_passwords_are_truncated(user_manager: UserManager):
    """Test passwords beyond 72 bytes only depend on their prefix"""
    base = 'x' * 72
    hashed = user_manager.hash_password(base + 'tail')

    assert user_manager.verify_password(base + 'other-tail', hashed)


@pytest.mark.asyncio
async def test_create_and_lookup_user(user_manager: UserManager, add_user):
    user = await add_user('Alice', first_name='Alice', last_name='Rao')

    assert user.id == 1
    assert user.is_admin is False
    assert await user_manager.get_user(1) == user
    assert await user_manager.get_user_by_username('alice') == user
    assert await user_manager.get_user_by_email('ALICE@example.com') == user
    assert await user_manager.get_user(2) is None


@pytest.mark.asyncio
async def test_duplicate_username_rejected(user_manager: UserManager, add_user):
    await add_user('alice')

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        await add_user('ALICE')

    assert exc_info.value.field == 'username'


@pytest.mark.asyncio
async def test_duplicate_email_rejected(user_manager: UserManager, add_user):
    await add_user('alice')

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        await user_manager.create_user(
            UserInsert(
                username='alice2',
                email='alice@example.com',
                first_name='Alice',
                last_name='Two',
                password_hash='x',
            )
        )

    assert exc_info.value.field == 'email'
    assert len(await user_manager.list_users()) == 1


@pytest.mark.asyncio
async def test_update_user_email_must_stay_unique(user_manager: UserManager, add_user):
    await add_user('alice')
    bob = await add_user('bob')

    with pytest.raises(UserAlreadyExistsError):
        await user_manager.update_user(bob.id, {'email': 'alice@example.com'})

    updated = await user_manager.update_user(bob.id, {'email': 'bob@example.com', 'city': 'Guntur'})
    assert updated.city == 'Guntur'
    assert await user_manager.update_user(99, {'city': 'Guntur'}) is None


@pytest.mark.asyncio
async def test_delete_user(user_manager: UserManager, add_user):
    user = await add_user('alice')

    assert await user_manager.delete_user(user.id) is True
    assert await user_manager.delete_user(user.id) is False
    assert await user_manager.get_user(user.id) is None


@pytest.mark.asyncio
async def test_find_users_by_name(user_manager: UserManager, add_user):
    """Test search matches first, last and full name ignoring case"""
    alice = await add_user('alice', first_name='Alice', last_name='Rao')
    bob = await add_user('bob', first_name='Bob', last_name='Kumar')
    await add_user('carol', first_name='Carol', last_name='Singh')

    assert await user_manager.find_users_by_name('ALI') == [alice]
    assert await user_manager.find_users_by_name('kumar') == [bob]
    assert await user_manager.find_users_by_name('alice rao') == [alice]
    assert await user_manager.find_users_by_name('zzz') == []


@pytest.mark.asyncio
async def test_search_users_rejects_short_terms(user_manager: UserManager, add_user):
    alice = await add_user('alice', first_name='Alice', last_name='Rao')

    with pytest.raises(ValidationError):
        await user_manager.search_users(' a ')

    assert await user_manager.search_users('  rao ') == [alice]
