"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes. The
store is built once by ``create_app`` and kept on ``app.state``; every
manager is a thin request-scoped wrapper around it.
"""

from typing import Annotated

from fastapi import Depends, Request

from alumni_portal.utils.document_manager import DocumentManager
from alumni_portal.utils.event_manager import EventManager
from alumni_portal.utils.forum_manager import ForumManager
from alumni_portal.utils.gallery_manager import GalleryManager
from alumni_portal.utils.job_manager import JobManager
from alumni_portal.utils.memory_store import MemStorage
from alumni_portal.utils.message_manager import MessageManager
from alumni_portal.utils.university_manager import UniversityInfoManager
from alumni_portal.utils.user_manager import UserManager


def get_storage(request: Request) -> MemStorage:
    """Get the application's MemStorage.

    Args:
        request: The incoming request.

    Returns:
        The store attached to the application at startup.
    """
    return request.app.state.storage


StorageDep = Annotated[MemStorage, Depends(get_storage)]


def get_user_manager(storage: StorageDep) -> UserManager:
    """Get UserManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        UserManager instance.
    """
    return UserManager(storage)


def get_event_manager(storage: StorageDep) -> EventManager:
    """Get EventManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        EventManager instance.
    """
    return EventManager(storage)


def get_job_manager(storage: StorageDep) -> JobManager:
    """Get JobManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        JobManager instance.
    """
    return JobManager(storage)


def get_gallery_manager(storage: StorageDep) -> GalleryManager:
    """Get GalleryManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        GalleryManager instance.
    """
    return GalleryManager(storage)


def get_forum_manager(storage: StorageDep) -> ForumManager:
    """Get ForumManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        ForumManager instance.
    """
    return ForumManager(storage)


def get_document_manager(storage: StorageDep) -> DocumentManager:
    """Get DocumentManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        DocumentManager instance.
    """
    return DocumentManager(storage)


def get_message_manager(storage: StorageDep) -> MessageManager:
    """Get MessageManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        MessageManager instance.
    """
    return MessageManager(storage)


def get_university_manager(storage: StorageDep) -> UniversityInfoManager:
    """Get UniversityInfoManager instance bound to the application store.

    Args:
        storage: The application's MemStorage.

    Returns:
        UniversityInfoManager instance.
    """
    return UniversityInfoManager(storage)


# Type aliases for dependency injection
UserManagerDep = Annotated[UserManager, Depends(get_user_manager)]
EventManagerDep = Annotated[EventManager, Depends(get_event_manager)]
JobManagerDep = Annotated[JobManager, Depends(get_job_manager)]
GalleryManagerDep = Annotated[GalleryManager, Depends(get_gallery_manager)]
ForumManagerDep = Annotated[ForumManager, Depends(get_forum_manager)]
DocumentManagerDep = Annotated[DocumentManager, Depends(get_document_manager)]
MessageManagerDep = Annotated[MessageManager, Depends(get_message_manager)]
UniversityInfoManagerDep = Annotated[
    UniversityInfoManager, Depends(get_university_manager)
]
