import pytest
from httpx import AsyncClient

from alumni_portal import config


@pytest.mark.asyncio
async def test_root_and_health(client: AsyncClient):
    assert (await client.get('/api/health')).json() == {'status': 'ok'}
    assert (await client.get('/')).json()['health'] == '/api/health'


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient, alumni_data):
    """Test user registration"""
    response = await client.post('/api/register', json=alumni_data)

    assert response.status_code == 201
    data = response.json()
    assert data['token']
    assert data['user']['username'] == 'alice'
    assert data['user']['firstName'] == 'Alice'
    assert data['user']['isAdmin'] is False
    assert data['user']['isProfileComplete'] is False
    assert 'passwordHash' not in data['user']
    assert 'password' not in data['user']


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, alumni, alumni_data):
    """Test registration with a taken username"""
    response = await client.post('/api/register', json={**alumni_data, 'email': 'new@example.com'})

    assert response.status_code == 400
    assert 'already exists' in response.json()['detail']


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient, alumni_data):
    response = await client.post('/api/register', json={**alumni_data, 'password': '123'})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_admin_with_token(client: AsyncClient, alumni_data, monkeypatch):
    monkeypatch.setattr(config, 'ADMIN_TOKEN', 'let-me-in')

    rejected = await client.post('/api/register', json={**alumni_data, 'adminToken': 'guess'})
    accepted = await client.post('/api/register', json={**alumni_data, 'adminToken': 'let-me-in'})

    assert rejected.status_code == 403
    assert accepted.status_code == 201
    assert accepted.json()['user']['isAdmin'] is True


@pytest.mark.asyncio
async def test_register_admin_without_configured_token(client: AsyncClient, alumni_data, monkeypatch):
    monkeypatch.setattr(config, 'ADMIN_TOKEN', None)

    response = await client.post('/api/register', json={**alumni_data, 'adminToken': 'anything'})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, alumni, alumni_data):
    """Test successful login"""
    response = await client.post(
        '/api/login',
        json={'username': alumni_data['username'], 'password': alumni_data['password']},
    )

    assert response.status_code == 200
    data = response.json()
    assert data['user']['id'] == alumni['user']['id']
    assert data['token']


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, alumni, alumni_data):
    """Test login with invalid credentials"""
    wrong_password = await client.post(
        '/api/login', json={'username': alumni_data['username'], 'password': 'wrongpassword'}
    )
    unknown_user = await client.post('/api/login', json={'username': 'nobody', 'password': 'whatever'})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401


@pytest.mark.asyncio
async def test_get_current_user(client: AsyncClient, alumni_headers):
    """Test getting current user info"""
    response = await client.get('/api/user', headers=alumni_headers)

    assert response.status_code == 200
    assert response.json()['email'] == 'alice@example.com'


@pytest.mark.asyncio
async def test_unauthorized_access(client: AsyncClient):
    """Test accessing protected route without auth"""
    response = await client.get('/api/user')

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient):
    response = await client.get('/api/user', headers={'Authorization': 'Bearer not-a-jwt'})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout(client: AsyncClient, alumni_headers):
    response = await client.post('/api/logout', headers=alumni_headers)

    assert response.status_code == 200
    assert response.json()['success'] is True


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, alumni_headers):
    response = await client.put(
        '/api/profile',
        headers=alumni_headers,
        json={'company': 'Infosys', 'graduationYear': 2019, 'isProfileComplete': True},
    )

    assert response.status_code == 200
    data = response.json()
    assert data['company'] == 'Infosys'
    assert data['graduationYear'] == 2019
    assert data['isProfileComplete'] is True
    assert data['firstName'] == 'Alice'


@pytest.mark.asyncio
async def test_update_profile_can_not_clear_required_fields(client: AsyncClient, alumni_headers):
    for body in ({'firstName': None}, {'lastName': ''}, {'email': None}, {'isProfileComplete': None}):
        response = await client.put('/api/profile', headers=alumni_headers, json=body)
        assert response.status_code == 422, body

    profile = (await client.get('/api/user', headers=alumni_headers)).json()
    assert profile['firstName'] == 'Alice'
    assert profile['lastName'] == 'Rao'
    assert profile['email'] == 'alice@example.com'


@pytest.mark.asyncio
async def test_update_profile_duplicate_email(client: AsyncClient, alumni_headers, other_alumni):
    response = await client.put('/api/profile', headers=alumni_headers, json={'email': 'bob@example.com'})

    assert response.status_code == 400
