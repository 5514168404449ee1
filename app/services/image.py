"""
Image service for property and unit galleries and the object store.
Handles uploads, featured and order updates, blob serving and blob cleanup.
"""

from typing import List, Optional, Tuple, Union
from fastapi import UploadFile
import logging

from app.models.image import PropertyImage, UnitImage
from app.schemas.image import (
    PropertyImageCreate,
    UnitImageCreate,
    StoredImage,
    StoredImageCounts,
    StoredImageListResponse,
)
from app.storage.base import Storage
from app.storage.object_store import ObjectStore
from app.utils.exceptions import ImageNotFoundError, NotFoundError, PropertyNotFoundError
from app.utils.file_utils import FileValidator, ValidatedImage
from app.utils.image_refs import content_type_for_key, encode_key, get_filename_from_object_key

logger = logging.getLogger(__name__)

GalleryImage = Union[PropertyImage, UnitImage]

DB_IMAGE_ROUTE = "/api/db-images/"


class ImageService:
    """
    Service for gallery images and the blob store behind them.
    """

    def __init__(self, storage: Storage, object_store: ObjectStore, validator: Optional[FileValidator] = None):
        self.storage = storage
        self.object_store = object_store
        self.validator = validator or FileValidator()

    # Property images
    async def list_property_images(self, page: int, limit: int) -> Tuple[List[PropertyImage], int]:
        """
        Get a page of every property image.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (images, total count)
        """
        offset = (page - 1) * limit
        return await self.storage.get_property_images(offset=offset, limit=limit)

    async def list_images_for_property(self, property_id: int) -> List[PropertyImage]:
        await self._ensure_property(property_id)
        return await self.storage.get_property_images_by_property(property_id)

    async def create_property_image(self, image_data: PropertyImageCreate) -> PropertyImage:
        """
        Attach an external image URL to a property.

        Raises:
            PropertyNotFoundError: If the property doesn't exist
        """
        await self._ensure_property(image_data.property_id)

        image = await self.storage.create_property_image(image_data.model_dump())
        logger.info(f"Property image created: {image.id} for property {image.property_id}")
        return image

    async def upload_property_image(
        self,
        property_id: int,
        file: UploadFile,
        alt: str = "",
        display_order: int = 0,
        is_featured: bool = False,
    ) -> PropertyImage:
        """
        Validate an uploaded file, store it in the object store and attach it to a property.

        Raises:
            PropertyNotFoundError: If the property doesn't exist
            ValidationError: If the file is not an accepted image
            StorageError: If the object store rejects the write
        """
        await self._ensure_property(property_id)

        validated = await self.validator.validate_upload_file(file)
        object_key = await self._store(validated)

        image = await self.storage.create_property_image({
            "property_id": property_id,
            "object_key": object_key,
            "alt": alt,
            "display_order": display_order,
            "is_featured": is_featured,
            "mime_type": validated.mime_type,
            "size": validated.size,
        })
        logger.info(f"Uploaded image {object_key} for property {property_id}")
        return image

    async def update_property_image_order(self, image_id: int, display_order: int) -> PropertyImage:
        image = await self.storage.update_property_image_order(image_id, display_order)
        if image is None:
            raise NotFoundError("Image", image_id)
        return image

    async def update_property_image_featured(self, image_id: int, is_featured: bool) -> PropertyImage:
        """
        Set or clear the featured flag; setting it clears the flag on sibling images.

        Raises:
            NotFoundError: If the image doesn't exist
        """
        image = await self.storage.update_property_image_featured(image_id, is_featured)
        if image is None:
            raise NotFoundError("Image", image_id)
        return image

    async def delete_property_image(self, image_id: int) -> None:
        """
        Delete a property image row and, best effort, its blob.

        Raises:
            NotFoundError: If the image doesn't exist
        """
        image = await self.storage.get_property_image(image_id)
        if image is None:
            raise NotFoundError("Image", image_id)

        await self._release_blob(image)
        await self.storage.delete_property_image(image_id)
        logger.info(f"Property image deleted: {image_id}")

    # Unit images
    async def list_unit_images(self, unit_id: int) -> List[UnitImage]:
        await self._ensure_unit(unit_id)
        return await self.storage.get_unit_images(unit_id)

    async def create_unit_image(self, image_data: UnitImageCreate) -> UnitImage:
        """
        Add a unit image from a base64 data URL or an external URL.
        Data takes precedence and is uploaded to the object store.

        Raises:
            NotFoundError: If the unit doesn't exist
            ValidationError: If the data URL is not an accepted image
        """
        await self._ensure_unit(image_data.unit_id)

        create_data = image_data.model_dump(exclude={"data", "filename"})
        if image_data.data:
            validated = self.validator.validate_data_url(image_data.data, image_data.filename)
            create_data.update(
                url=None,
                object_key=await self._store(validated),
                mime_type=validated.mime_type,
                size=validated.size,
            )

        image = await self.storage.create_unit_image(create_data)
        logger.info(f"Unit image created: {image.id} for unit {image.unit_id}")
        return image

    async def upload_unit_image(
        self,
        unit_id: int,
        file: UploadFile,
        alt: str = "",
        display_order: int = 0,
        is_featured: bool = False,
    ) -> UnitImage:
        """Validate an uploaded file and attach it to a unit."""
        await self._ensure_unit(unit_id)

        validated = await self.validator.validate_upload_file(file)
        object_key = await self._store(validated)

        image = await self.storage.create_unit_image({
            "unit_id": unit_id,
            "object_key": object_key,
            "alt": alt,
            "display_order": display_order,
            "is_featured": is_featured,
            "mime_type": validated.mime_type,
            "size": validated.size,
        })
        logger.info(f"Uploaded image {object_key} for unit {unit_id}")
        return image

    async def update_unit_image_order(self, image_id: int, display_order: int) -> UnitImage:
        image = await self.storage.update_unit_image_order(image_id, display_order)
        if image is None:
            raise NotFoundError("Image", image_id)
        return image

    async def update_unit_image_featured(self, image_id: int, is_featured: bool) -> UnitImage:
        image = await self.storage.update_unit_image_featured(image_id, is_featured)
        if image is None:
            raise NotFoundError("Image", image_id)
        return image

    async def delete_unit_image(self, image_id: int) -> None:
        """
        Delete a unit image row and, best effort, its blob or database copy.

        Raises:
            NotFoundError: If the image doesn't exist
        """
        image = await self.storage.get_unit_image(image_id)
        if image is None:
            raise NotFoundError("Image", image_id)

        await self._release_blob(image)
        await self.storage.delete_unit_image(image_id)
        logger.info(f"Unit image deleted: {image_id}")

    # Cascading cleanup
    async def release_property_blobs(self, property_id: int) -> None:
        """Remove the blobs of a property's images and of its units' images."""
        for image in await self.storage.get_property_images_by_property(property_id):
            await self._release_blob(image)
        for unit in await self.storage.get_property_units(property_id):
            await self.release_unit_blobs(unit.id)

    async def release_unit_blobs(self, unit_id: int) -> None:
        for image in await self.storage.get_unit_images(unit_id):
            await self._release_blob(image)

    # Blob serving
    async def get_image_bytes(self, key: str) -> Tuple[bytes, str]:
        """
        Read a blob from the object store.

        Args:
            key: Object key

        Returns:
            Tuple of (bytes, content type)

        Raises:
            ImageNotFoundError: If the blob is missing or cannot be read
        """
        try:
            data = await self.object_store.get(key)
        except Exception as e:
            logger.warning(f"Failed to read {key} from {self.object_store.backend_name}: {e}")
            raise ImageNotFoundError()

        if data is None:
            raise ImageNotFoundError()
        return data, content_type_for_key(key)

    async def serve_property_image(self, object_key: str) -> Tuple[bytes, str]:
        """Serve bytes only when a property image row owns the key."""
        if await self.storage.get_property_image_by_object_key(object_key) is None:
            raise ImageNotFoundError("Property image not found")
        return await self.get_image_bytes(object_key)

    async def serve_unit_image(self, object_key: str) -> Tuple[bytes, str]:
        """Serve bytes only when a unit image row owns the key."""
        if await self.storage.get_unit_image_by_object_key(object_key) is None:
            raise ImageNotFoundError("Unit image not found")
        return await self.get_image_bytes(object_key)

    async def get_db_image(self, object_key: str) -> Tuple[bytes, str]:
        """
        Read bytes kept in the image_storage table.

        Raises:
            ImageNotFoundError: If no row has the key
        """
        record = await self.storage.get_image_data_by_object_key(object_key)
        if record is None:
            raise ImageNotFoundError()
        return record.data, record.mime_type or content_type_for_key(object_key)

    async def delete_object(self, key: str) -> None:
        """
        Delete a blob from the object store.

        Raises:
            ImageNotFoundError: If the key is not stored
        """
        if not await self.object_store.delete(key):
            raise ImageNotFoundError()
        logger.info(f"Deleted {key} from {self.object_store.backend_name}")

    async def list_object_images(self) -> StoredImageListResponse:
        """List blob-store images with counts per storage location."""
        keys = await self.object_store.list_images()
        images = [StoredImage(key=key, url=f"/api/images/{encode_key(key)}") for key in keys]

        database_count = len(await self.storage.get_all_stored_images())
        counts = StoredImageCounts(
            database=database_count,
            object_storage=len(images),
            total=database_count + len(images),
        )
        return StoredImageListResponse(images=images, counts=counts)

    async def _store(self, validated: ValidatedImage) -> str:
        return await self.object_store.upload(validated.data, validated.filename, validated.mime_type)

    async def _release_blob(self, image: GalleryImage) -> None:
        """Delete the bytes behind an image row; failures are only logged."""
        try:
            if image.url and image.url.startswith(DB_IMAGE_ROUTE):
                object_key = get_filename_from_object_key(image.url)
                if object_key:
                    await self.storage.delete_image_data_by_object_key(object_key)
                    logger.info(f"Deleted image from database storage: {object_key}")
                return

            ref = image.image_ref
            if ref and not ref.startswith("http") and not ref.startswith("/"):
                await self.object_store.delete(ref)
                logger.info(f"Deleted image from object storage: {ref}")
        except Exception as e:
            logger.warning(f"Failed to delete stored bytes of image {image.id}: {e}")

    async def _ensure_property(self, property_id: int) -> None:
        if await self.storage.get_property(property_id) is None:
            raise PropertyNotFoundError(property_id)

    async def _ensure_unit(self, unit_id: int) -> None:
        if await self.storage.get_property_unit(unit_id) is None:
            raise NotFoundError("Property unit", unit_id)
