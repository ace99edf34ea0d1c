"""Photo gallery routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from alumni_portal.api.routes.auth import get_current_admin
from alumni_portal.core.dependencies import GalleryManagerDep
from alumni_portal.schemas.gallery import (
    Gallery,
    GalleryBase,
    GalleryImage,
    GalleryImageBase,
    GalleryImageInsert,
    GalleryImageUpdate,
    GalleryInsert,
    GalleryUpdate,
)
from alumni_portal.schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Gallery"])


def _gallery_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gallery not found")


def _image_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")


@router.get("/galleries", response_model=List[Gallery], summary="List galleries")
async def list_galleries(gallery_manager: GalleryManagerDep) -> List[Gallery]:
    return await gallery_manager.list_galleries()


@router.get("/galleries/{gallery_id}", response_model=Gallery, summary="Get a gallery")
async def get_gallery(gallery_id: int, gallery_manager: GalleryManagerDep) -> Gallery:
    gallery = await gallery_manager.get_gallery(gallery_id)
    if gallery is None:
        raise _gallery_not_found()
    return gallery


@router.post(
    "/galleries",
    response_model=Gallery,
    status_code=status.HTTP_201_CREATED,
    summary="Create a gallery",
)
async def create_gallery(
    req: GalleryBase,
    gallery_manager: GalleryManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Gallery:
    return await gallery_manager.create_gallery(
        GalleryInsert(**req.model_dump(), created_by=current_user.id)
    )


@router.put("/galleries/{gallery_id}", response_model=Gallery, summary="Update a gallery")
async def update_gallery(
    gallery_id: int,
    req: GalleryUpdate,
    gallery_manager: GalleryManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Gallery:
    gallery = await gallery_manager.update_gallery(
        gallery_id, req.model_dump(exclude_unset=True)
    )
    if gallery is None:
        raise _gallery_not_found()
    return gallery


@router.delete(
    "/galleries/{gallery_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a gallery",
)
async def delete_gallery(
    gallery_id: int,
    gallery_manager: GalleryManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Response:
    """Delete a gallery, then its images."""
    if not await gallery_manager.delete_gallery(gallery_id):
        raise _gallery_not_found()
    removed = await gallery_manager.delete_images_for_gallery(gallery_id)
    logger.info("Removed %d images of deleted gallery %s", removed, gallery_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/galleries/{gallery_id}/images",
    response_model=List[GalleryImage],
    summary="List gallery images",
)
async def list_gallery_images(
    gallery_id: int, gallery_manager: GalleryManagerDep
) -> List[GalleryImage]:
    return await gallery_manager.list_images_by_gallery(gallery_id)


@router.post(
    "/galleries/{gallery_id}/images",
    response_model=GalleryImage,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a gallery image",
)
async def upload_gallery_image(
    gallery_id: int,
    req: GalleryImageBase,
    gallery_manager: GalleryManagerDep,
    current_user: User = Depends(get_current_admin),
) -> GalleryImage:
    if await gallery_manager.get_gallery(gallery_id) is None:
        raise _gallery_not_found()
    return await gallery_manager.create_image(
        GalleryImageInsert(
            **req.model_dump(), gallery_id=gallery_id, uploaded_by=current_user.id
        )
    )


@router.put(
    "/gallery-images/{image_id}",
    response_model=GalleryImage,
    summary="Update a gallery image",
)
async def update_gallery_image(
    image_id: int,
    req: GalleryImageUpdate,
    gallery_manager: GalleryManagerDep,
    current_user: User = Depends(get_current_admin),
) -> GalleryImage:
    image = await gallery_manager.update_image(image_id, req.model_dump(exclude_unset=True))
    if image is None:
        raise _image_not_found()
    return image


@router.delete(
    "/gallery-images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a gallery image",
)
async def delete_gallery_image(
    image_id: int,
    gallery_manager: GalleryManagerDep,
    current_user: User = Depends(get_current_admin),
) -> Response:
    if not await gallery_manager.delete_image(image_id):
        raise _image_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
