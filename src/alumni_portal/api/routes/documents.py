"""Document upload and review routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from alumni_portal.api.routes.auth import get_current_user
from alumni_portal.core import permissions
from alumni_portal.core.dependencies import DocumentManagerDep
from alumni_portal.schemas.document import (
    Document,
    DocumentBase,
    DocumentInsert,
    DocumentUpdate,
)
from alumni_portal.schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["Document"])


def _document_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")


@router.get("", response_model=List[Document], summary="List documents")
async def list_documents(
    document_manager: DocumentManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[Document]:
    """Admins see every document; alumni see their own."""
    if permissions.is_admin(current_user):
        return await document_manager.list_documents()
    return await document_manager.list_documents_by_user(current_user.id)


@router.get("/{document_id}", response_model=Document, summary="Get a document")
async def get_document(
    document_id: int,
    document_manager: DocumentManagerDep,
    current_user: User = Depends(get_current_user),
) -> Document:
    document = await document_manager.get_document(document_id)
    if document is None:
        raise _document_not_found()
    if not permissions.can_view_document(current_user, document):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own documents",
        )
    return document


@router.post(
    "",
    response_model=Document,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a document",
)
async def create_document(
    req: DocumentBase,
    document_manager: DocumentManagerDep,
    current_user: User = Depends(get_current_user),
) -> Document:
    return await document_manager.create_document(
        DocumentInsert(**req.model_dump(), user_id=current_user.id)
    )


@router.put("/{document_id}", response_model=Document, summary="Update or review a document")
async def update_document(
    document_id: int,
    req: DocumentUpdate,
    document_manager: DocumentManagerDep,
    current_user: User = Depends(get_current_user),
) -> Document:
    """Edit a document or record a review decision.

    Permission requirements:
    - Owner: Can edit title, type, file and description
    - Admin: Can edit any document and set status and admin feedback

    Raises:
        HTTPException: If permission denied or document not found.
    """
    document = await document_manager.get_document(document_id)
    if document is None:
        raise _document_not_found()
    if not permissions.can_edit_document(current_user, document):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only update your own documents",
        )
    if req.has_review_fields() and not permissions.can_review_document(current_user):
        logger.warning("User %s tried to review document %s", current_user.id, document_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required",
        )

    content_changes = req.content_changes()
    if content_changes:
        document = await document_manager.update_document(document_id, content_changes)
    if req.has_review_fields():
        feedback = (
            req.admin_feedback
            if "admin_feedback" in req.model_fields_set
            else document.admin_feedback
        )
        document = await document_manager.review_document(
            document_id, req.status or document.status, feedback
        )
    return document


@router.delete(
    "/{document_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a document"
)
async def delete_document(
    document_id: int,
    document_manager: DocumentManagerDep,
    current_user: User = Depends(get_current_user),
) -> Response:
    document = await document_manager.get_document(document_id)
    if document is None:
        raise _document_not_found()
    if not permissions.can_edit_document(current_user, document):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own documents",
        )
    await document_manager.delete_document(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
