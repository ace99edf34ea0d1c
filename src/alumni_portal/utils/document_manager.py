import logging
from typing import Any, Dict, List, Optional

from alumni_portal.schemas.document import Document, DocumentInsert, DocumentStatus
from alumni_portal.utils.clock import now_utc
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)


class DocumentManager:
    """Manages documents uploaded by alumni for admin review."""

    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def create_document(self, data: DocumentInsert) -> Document:
        """Create a new document record, pending review."""
        document = self.storage.documents.insert(
            lambda document_id: Document(
                id=document_id,
                status=DocumentStatus.PENDING,
                admin_feedback=None,
                uploaded_at=now_utc(),
                updated_at=None,
                **data.model_dump(),
            )
        )
        logger.info(
            "Created document: %s (id=%s, owner=%s)",
            document.title, document.id, document.user_id
        )
        return document

    async def get_document(self, document_id: int) -> Optional[Document]:
        return self.storage.documents.get(document_id)

    async def list_documents(self) -> List[Document]:
        return self.storage.documents.all()

    async def list_documents_by_user(self, user_id: int) -> List[Document]:
        return self.storage.documents.filter(lambda d: d.user_id == user_id)

    async def update_document(
        self, document_id: int, changes: Dict[str, Any]
    ) -> Optional[Document]:
        """Merge owner edits into a document and stamp ``updated_at``."""
        return self.storage.documents.update(
            document_id, {**changes, "updated_at": now_utc()}
        )

    async def review_document(
        self,
        document_id: int,
        status: DocumentStatus,
        admin_feedback: Optional[str] = None,
    ) -> Optional[Document]:
        """Record an admin's decision on a document."""
        document = self.storage.documents.update(
            document_id,
            {
                "status": status,
                "admin_feedback": admin_feedback,
                "updated_at": now_utc(),
            },
        )
        if document is not None:
            logger.info("Document %s marked %s", document_id, status.value)
        return document

    async def delete_document(self, document_id: int) -> bool:
        deleted = self.storage.documents.delete(document_id)
        if deleted:
            logger.info("Deleted document: %s", document_id)
        return deleted
