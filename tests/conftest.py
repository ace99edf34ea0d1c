"""
Alumni Portal - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Set testing environment
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['LOG_LEVEL'] = 'WARNING'

from alumni_portal.app import create_app
from alumni_portal.schemas.user import User, UserInsert
from alumni_portal.utils.event_manager import EventManager
from alumni_portal.utils.forum_manager import ForumManager
from alumni_portal.utils.memory_store import MemStorage
from alumni_portal.utils.message_manager import MessageManager
from alumni_portal.utils.seed import seed_defaults
from alumni_portal.utils.user_manager import UserManager

ADMIN_CREDENTIALS = {'username': 'admin', 'password': 'admin123'}


@pytest.fixture
def storage() -> MemStorage:
    """A fresh, empty store for each test"""
    return MemStorage()


@pytest.fixture
def user_manager(storage: MemStorage) -> UserManager:
    return UserManager(storage)


@pytest.fixture
def forum_manager(storage: MemStorage) -> ForumManager:
    return ForumManager(storage)


@pytest.fixture
def message_manager(storage: MemStorage) -> MessageManager:
    return MessageManager(storage)


@pytest.fixture
def event_manager(storage: MemStorage) -> EventManager:
    return EventManager(storage)


def _make_user(user_id: int = 1, is_admin: bool = False, **overrides) -> User:
    fields = {
        'id': user_id,
        'username': f'user{user_id}',
        'email': f'user{user_id}@example.com',
        'first_name': 'Test',
        'last_name': f'User{user_id}',
        'password_hash': 'not-a-real-hash',
        'is_admin': is_admin,
    }
    fields.update(overrides)
    return User(**fields)


async def _add_user(user_manager: UserManager, username: str, first_name: str = 'Test',
                    last_name: str = 'User', is_admin: bool = False) -> User:
    return await user_manager.create_user(
        UserInsert(
            username=username,
            email=f'{username}@example.com',
            first_name=first_name,
            last_name=last_name,
            password_hash='not-a-real-hash',
            is_admin=is_admin,
        )
    )


@pytest.fixture
def make_user():
    """Build User records without touching a store"""
    return _make_user


@pytest.fixture
def add_user(user_manager: UserManager):
    """Store users with a placeholder password hash"""
    async def _add(username: str, **kwargs) -> User:
        return await _add_user(user_manager, username, **kwargs)
    return _add


@pytest.fixture
async def client(storage: MemStorage) -> AsyncGenerator[AsyncClient, None]:
    """Create test client around a seeded store"""
    await seed_defaults(storage)
    app = create_app(storage)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


@pytest.fixture
def alumni_data() -> dict:
    return {
        'username': 'alice',
        'email': 'alice@example.com',
        'firstName': 'Alice',
        'lastName': 'Rao',
        'password': 'alicepass123',
    }


@pytest.fixture
def other_alumni_data() -> dict:
    return {
        'username': 'bob',
        'email': 'bob@example.com',
        'firstName': 'Bob',
        'lastName': 'Kumar',
        'password': 'bobpass123',
    }


def bearer(token: str) -> dict:
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def admin_headers(client: AsyncClient) -> dict:
    """Authentication headers for the seeded administrator"""
    response = await client.post('/api/login', json=ADMIN_CREDENTIALS)
    assert response.status_code == 200
    return bearer(response.json()['token'])


@pytest.fixture
async def alumni(client: AsyncClient, alumni_data: dict) -> dict:
    """Register an alumnus; returns the login response body"""
    response = await client.post('/api/register', json=alumni_data)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def other_alumni(client: AsyncClient, other_alumni_data: dict) -> dict:
    response = await client.post('/api/register', json=other_alumni_data)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def alumni_headers(alumni: dict) -> dict:
    return bearer(alumni['token'])


@pytest.fixture
def other_alumni_headers(other_alumni: dict) -> dict:
    return bearer(other_alumni['token'])
