"""Photo gallery management."""

import logging
from typing import Any, Dict, List, Optional

from alumni_portal.schemas.gallery import (
    Gallery,
    GalleryImage,
    GalleryImageInsert,
    GalleryInsert,
)
from alumni_portal.utils.clock import now_utc
from alumni_portal.utils.memory_store import MemStorage

logger = logging.getLogger(__name__)


class GalleryManager:
    """Manages galleries and the images they contain."""

    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def get_gallery(self, gallery_id: int) -> Optional[Gallery]:
        return self.storage.galleries.get(gallery_id)

    async def list_galleries(self) -> List[Gallery]:
        return self.storage.galleries.all()

    async def create_gallery(self, data: GalleryInsert) -> Gallery:
        gallery = self.storage.galleries.insert(
            lambda gallery_id: Gallery(
                id=gallery_id, created_at=now_utc(), **data.model_dump()
            )
        )
        logger.info("Created gallery: %s (id=%s)", gallery.title, gallery.id)
        return gallery

    async def update_gallery(
        self, gallery_id: int, changes: Dict[str, Any]
    ) -> Optional[Gallery]:
        return self.storage.galleries.update(gallery_id, changes)

    async def delete_gallery(self, gallery_id: int) -> bool:
        deleted = self.storage.galleries.delete(gallery_id)
        if deleted:
            logger.info("Deleted gallery: %s", gallery_id)
        return deleted

    # --- Images ---

    async def get_image(self, image_id: int) -> Optional[GalleryImage]:
        return self.storage.gallery_images.get(image_id)

    async def list_images_by_gallery(self, gallery_id: int) -> List[GalleryImage]:
        return self.storage.gallery_images.filter(lambda i: i.gallery_id == gallery_id)

    async def create_image(self, data: GalleryImageInsert) -> GalleryImage:
        image = self.storage.gallery_images.insert(
            lambda image_id: GalleryImage(
                id=image_id, uploaded_at=now_utc(), **data.model_dump()
            )
        )
        logger.info("Added image %s to gallery %s", image.id, image.gallery_id)
        return image

    async def update_image(
        self, image_id: int, changes: Dict[str, Any]
    ) -> Optional[GalleryImage]:
        return self.storage.gallery_images.update(image_id, changes)

    async def delete_image(self, image_id: int) -> bool:
        return self.storage.gallery_images.delete(image_id)

    async def delete_images_for_gallery(self, gallery_id: int) -> int:
        return self.storage.gallery_images.delete_where(
            lambda i: i.gallery_id == gallery_id
        )
