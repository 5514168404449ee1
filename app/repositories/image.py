"""
Repositories for gallery images and database-resident image bytes.
Handles gallery ordering and the single featured image per parent.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from app.models.image import PropertyImage, UnitImage, ImageStorage
from app.repositories.base import BaseRepository, ModelType
from typing import Any, Dict, List, Optional, Type
import logging

logger = logging.getLogger(__name__)

GALLERY_ORDER = ("display_order", "id")


class GalleryImageRepository(BaseRepository[ModelType]):
    """
    Shared behaviour of property and unit galleries.
    Subclasses name the column that links an image to its parent.
    """

    parent_field: str = ""

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        super().__init__(model, db)
        self.parent_column = getattr(model, self.parent_field)

    async def get_by_parent(self, parent_id: int) -> List[ModelType]:
        """
        Get the gallery of a parent.

        Args:
            parent_id: ID of the property or unit

        Returns:
            Images sorted by display order
        """
        return await self.get_multi(filters={self.parent_field: parent_id}, order_by=GALLERY_ORDER)

    async def get_by_object_key(self, object_key: str) -> Optional[ModelType]:
        """Get the image that owns an object storage key."""
        return await self.get_by_field("object_key", object_key)

    async def create_image(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create an image, clearing sibling featured flags first when it is featured.

        Args:
            obj_in: Field values for the new image

        Returns:
            Created image
        """
        if obj_in.get("is_featured"):
            await self._clear_featured(obj_in[self.parent_field])
        return await self.create(obj_in)

    async def update_featured(self, image_id: int, is_featured: bool) -> Optional[ModelType]:
        """
        Update the featured flag of an image.
        Setting it clears the flag on every other image of the same parent first.

        Args:
            image_id: ID of the image
            is_featured: New flag value

        Returns:
            Updated image if found, None otherwise
        """
        image = await self.get_by_id(image_id)
        if image is None:
            return None

        try:
            if is_featured:
                await self._clear_featured(getattr(image, self.parent_field), exclude_id=image_id)

            await self.db.execute(
                update(self.model)
                .where(self.model.id == image_id)
                .values(is_featured=is_featured)
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update featured flag of {self.model.__name__} {image_id}: {e}")
            raise

        await self.db.refresh(image)
        return image

    async def _clear_featured(self, parent_id: int, exclude_id: Optional[int] = None) -> None:
        stmt = (
            update(self.model)
            .where(self.parent_column == parent_id)
            .where(self.model.is_featured.is_(True))
            .values(is_featured=False)
        )
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        await self.db.execute(stmt)

    async def delete_by_parent(self, parent_ids: List[int]) -> int:
        """Delete every image of the given parents."""
        if not parent_ids:
            return 0
        return await self.delete_where({self.parent_field: parent_ids})


class PropertyImageRepository(GalleryImageRepository[PropertyImage]):
    """Repository for property gallery images."""

    parent_field = "property_id"

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyImage, db)


class UnitImageRepository(GalleryImageRepository[UnitImage]):
    """Repository for unit gallery images."""

    parent_field = "unit_id"

    def __init__(self, db: AsyncSession):
        super().__init__(UnitImage, db)


class ImageStorageRepository(BaseRepository[ImageStorage]):
    """Repository for image bytes stored in the database."""

    def __init__(self, db: AsyncSession):
        super().__init__(ImageStorage, db)

    async def get_by_object_key(self, object_key: str) -> Optional[ImageStorage]:
        """Get stored bytes by object key."""
        return await self.get_by_field("object_key", object_key)

    async def delete_by_object_key(self, object_key: str) -> bool:
        """Delete stored bytes by object key."""
        return await self.delete_where({"object_key": object_key}) > 0
