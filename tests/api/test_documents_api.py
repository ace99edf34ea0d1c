import pytest
from httpx import AsyncClient

DOCUMENT = {
    'title': 'Degree certificate',
    'documentType': 'certificate',
    'fileUrl': '/uploads/degree.pdf',
    'fileType': 'pdf',
}


@pytest.fixture
async def document(client: AsyncClient, alumni_headers) -> dict:
    response = await client.post('/api/documents', json=DOCUMENT, headers=alumni_headers)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_upload_document(client: AsyncClient, alumni, document):
    assert document['userId'] == alumni['user']['id']
    assert document['status'] == 'pending'
    assert document['adminFeedback'] is None


@pytest.mark.asyncio
async def test_document_visibility(client: AsyncClient, alumni_headers, other_alumni_headers,
                                   admin_headers, document):
    await client.post('/api/documents', json={**DOCUMENT, 'title': 'Resume'}, headers=other_alumni_headers)

    assert [d['title'] for d in (await client.get('/api/documents', headers=alumni_headers)).json()] == [
        'Degree certificate'
    ]
    assert len((await client.get('/api/documents', headers=admin_headers)).json()) == 2
    assert (await client.get(f'/api/documents/{document["id"]}', headers=other_alumni_headers)).status_code == 403
    assert (await client.get(f'/api/documents/{document["id"]}', headers=admin_headers)).status_code == 200
    assert (await client.get('/api/documents/99', headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_owner_edits_but_can_not_review(client: AsyncClient, alumni_headers, document):
    edited = await client.put(
        f'/api/documents/{document["id"]}', json={'description': 'Final year'}, headers=alumni_headers
    )
    self_review = await client.put(
        f'/api/documents/{document["id"]}', json={'status': 'approved'}, headers=alumni_headers
    )

    assert edited.status_code == 200
    assert edited.json()['description'] == 'Final year'
    assert edited.json()['updatedAt'] is not None
    assert self_review.status_code == 403


@pytest.mark.asyncio
async def test_admin_reviews_document(client: AsyncClient, alumni_headers, admin_headers, document):
    reviewed = await client.put(
        f'/api/documents/{document["id"]}',
        json={'status': 'rejected', 'adminFeedback': 'Scan is unreadable'},
        headers=admin_headers,
    )

    assert reviewed.status_code == 200
    assert reviewed.json()['status'] == 'rejected'
    assert reviewed.json()['adminFeedback'] == 'Scan is unreadable'

    seen_by_owner = await client.get(f'/api/documents/{document["id"]}', headers=alumni_headers)
    assert seen_by_owner.json()['status'] == 'rejected'


@pytest.mark.asyncio
async def test_invalid_status_rejected(client: AsyncClient, admin_headers, document):
    response = await client.put(
        f'/api/documents/{document["id"]}', json={'status': 'archived'}, headers=admin_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_document(client: AsyncClient, alumni_headers, other_alumni_headers, document):
    assert (await client.delete(f'/api/documents/{document["id"]}',
                                headers=other_alumni_headers)).status_code == 403
    assert (await client.delete(f'/api/documents/{document["id"]}', headers=alumni_headers)).status_code == 204
    assert (await client.get('/api/documents', headers=alumni_headers)).json() == []
