"""
FastAPI dependency injection utilities for storage backends and services.
Selects the in-memory or relational storage per request and builds services on top.
"""

from typing import AsyncGenerator
from fastapi import Depends, Request

from app.config import settings
from app import database
from app.services.catalog import CatalogService
from app.services.image import ImageService
from app.services.inquiry import InquiryService
from app.services.property import PropertyService
from app.storage.base import Storage
from app.storage.object_store import DatabaseObjectStore, ObjectStore
from app.storage.sql import SqlStorage


async def get_storage(request: Request) -> AsyncGenerator[Storage, None]:
    """
    Get the storage backend for a request.

    The in-memory store created at startup is shared by every request.
    Otherwise a relational storage is bound to a fresh database session.

    Args:
        request: Current request

    Yields:
        Storage instance
    """
    memory_storage = getattr(request.app.state, "memory_storage", None)
    if memory_storage is not None:
        yield memory_storage
        return

    if database.AsyncSessionLocal is None:
        raise RuntimeError("DATABASE_URL is not configured")

    async with database.AsyncSessionLocal() as session:
        try:
            yield SqlStorage(session)
        except Exception:
            await session.rollback()
            raise


async def get_object_store(
    request: Request,
    storage: Storage = Depends(get_storage)
) -> ObjectStore:
    """
    Get the object store for a request.

    The database-backed store writes through the request's storage,
    every other backend is shared from application state.
    """
    if settings.object_storage_backend == "database":
        return DatabaseObjectStore(storage)
    return request.app.state.object_store


async def get_catalog_service(storage: Storage = Depends(get_storage)) -> CatalogService:
    return CatalogService(storage)


async def get_image_service(
    storage: Storage = Depends(get_storage),
    object_store: ObjectStore = Depends(get_object_store)
) -> ImageService:
    """
    Get image service instance.

    Args:
        storage: Storage backend
        object_store: Blob store for image bytes

    Returns:
        ImageService instance
    """
    return ImageService(storage, object_store)


async def get_property_service(
    storage: Storage = Depends(get_storage),
    image_service: ImageService = Depends(get_image_service)
) -> PropertyService:
    """
    Get property service instance.

    Args:
        storage: Storage backend
        image_service: Image service used to release blobs on delete

    Returns:
        PropertyService instance
    """
    return PropertyService(storage, image_service)


async def get_inquiry_service(storage: Storage = Depends(get_storage)) -> InquiryService:
    return InquiryService(storage)
