"""
Relational storage backend.
Implements the storage interface on top of the async SQLAlchemy repositories.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional, Tuple
import logging

from app.models import (
    Location,
    Neighborhood,
    Feature,
    Property,
    PropertyUnit,
    PropertyImage,
    UnitImage,
    ImageStorage,
    Inquiry,
)
from app.repositories import (
    LocationRepository,
    NeighborhoodRepository,
    FeatureRepository,
    PropertyRepository,
    PropertyUnitRepository,
    PropertyImageRepository,
    UnitImageRepository,
    ImageStorageRepository,
    InquiryRepository,
)
from app.storage.base import Storage

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """
    Storage bound to one database session.
    A new instance is created for every request.
    """

    backend_name = "database"

    def __init__(self, db: AsyncSession):
        self.db = db
        self.locations = LocationRepository(db)
        self.neighborhoods = NeighborhoodRepository(db)
        self.features = FeatureRepository(db)
        self.properties = PropertyRepository(db)
        self.units = PropertyUnitRepository(db)
        self.property_images = PropertyImageRepository(db)
        self.unit_images = UnitImageRepository(db)
        self.stored_images = ImageStorageRepository(db)
        self.inquiries = InquiryRepository(db)

    # Locations
    async def get_locations(self) -> List[Location]:
        return await self.locations.get_multi()

    async def get_location(self, location_id: int) -> Optional[Location]:
        return await self.locations.get_by_id(location_id)

    async def get_location_by_slug(self, slug: str) -> Optional[Location]:
        return await self.locations.get_by_slug(slug)

    async def create_location(self, data: Dict[str, Any]) -> Location:
        return await self.locations.create(data)

    async def update_location(self, location_id: int, data: Dict[str, Any]) -> Optional[Location]:
        return await self.locations.update(location_id, data)

    # Neighborhoods
    async def get_neighborhood_by_location_id(self, location_id: int) -> Optional[Neighborhood]:
        return await self.neighborhoods.get_by_location_id(location_id)

    async def create_neighborhood(self, data: Dict[str, Any]) -> Neighborhood:
        return await self.neighborhoods.create(data)

    async def update_neighborhood(self, neighborhood_id: int, data: Dict[str, Any]) -> Optional[Neighborhood]:
        return await self.neighborhoods.update(neighborhood_id, data)

    # Features
    async def get_features(self) -> List[Feature]:
        return await self.features.get_multi()

    async def create_feature(self, data: Dict[str, Any]) -> Feature:
        return await self.features.create(data)

    # Properties
    async def get_properties(self) -> List[Property]:
        return await self.properties.get_multi()

    async def get_properties_by_location(self, location_id: int) -> List[Property]:
        return await self.properties.get_by_location(location_id)

    async def get_property(self, property_id: int) -> Optional[Property]:
        return await self.properties.get_by_id(property_id)

    async def create_property(self, data: Dict[str, Any]) -> Property:
        return await self.properties.create(data)

    async def update_property(self, property_id: int, data: Dict[str, Any]) -> Optional[Property]:
        return await self.properties.update(property_id, data)

    async def delete_property(self, property_id: int) -> bool:
        if not await self.properties.exists(property_id):
            return False

        unit_ids = await self.units.get_ids_by_property(property_id)
        await self.unit_images.delete_by_parent(unit_ids)
        await self.units.delete_where({"property_id": property_id})
        await self.property_images.delete_by_parent([property_id])
        deleted = await self.properties.delete(property_id)
        logger.info(f"Deleted property {property_id} with {len(unit_ids)} units")
        return deleted

    # Inquiries
    async def get_inquiries(self) -> List[Inquiry]:
        return await self.inquiries.get_newest_first()

    async def get_inquiry(self, inquiry_id: int) -> Optional[Inquiry]:
        return await self.inquiries.get_by_id(inquiry_id)

    async def create_inquiry(self, data: Dict[str, Any]) -> Inquiry:
        return await self.inquiries.create(data)

    async def update_inquiry_status(self, inquiry_id: int, status: str) -> Optional[Inquiry]:
        return await self.inquiries.update(inquiry_id, {"status": status})

    # Property images
    async def get_property_images(self, offset: int = 0, limit: Optional[int] = None) -> Tuple[List[PropertyImage], int]:
        total = await self.property_images.count()
        images = await self.property_images.get_multi(skip=offset, limit=limit)
        return images, total

    async def get_property_images_by_property(self, property_id: int) -> List[PropertyImage]:
        return await self.property_images.get_by_parent(property_id)

    async def get_property_image(self, image_id: int) -> Optional[PropertyImage]:
        return await self.property_images.get_by_id(image_id)

    async def get_property_image_by_object_key(self, object_key: str) -> Optional[PropertyImage]:
        return await self.property_images.get_by_object_key(object_key)

    async def create_property_image(self, data: Dict[str, Any]) -> PropertyImage:
        return await self.property_images.create_image(data)

    async def update_property_image_order(self, image_id: int, display_order: int) -> Optional[PropertyImage]:
        return await self.property_images.update(image_id, {"display_order": display_order})

    async def update_property_image_featured(self, image_id: int, is_featured: bool) -> Optional[PropertyImage]:
        return await self.property_images.update_featured(image_id, is_featured)

    async def update_property_image_object_key(
        self, image_id: int, object_key: str, mime_type: str, size: int
    ) -> Optional[PropertyImage]:
        return await self.property_images.update(
            image_id, {"object_key": object_key, "mime_type": mime_type, "size": size}
        )

    async def delete_property_image(self, image_id: int) -> bool:
        return await self.property_images.delete(image_id)

    # Property units
    async def get_all_property_units(self) -> List[PropertyUnit]:
        return await self.units.get_multi()

    async def get_property_units(self, property_id: int) -> List[PropertyUnit]:
        return await self.units.get_by_property(property_id)

    async def get_property_unit(self, unit_id: int) -> Optional[PropertyUnit]:
        return await self.units.get_by_id(unit_id)

    async def create_property_unit(self, data: Dict[str, Any]) -> PropertyUnit:
        return await self.units.create(data)

    async def update_property_unit(self, unit_id: int, data: Dict[str, Any]) -> Optional[PropertyUnit]:
        return await self.units.update(unit_id, data)

    async def delete_property_unit(self, unit_id: int) -> bool:
        if not await self.units.exists(unit_id):
            return False
        await self.unit_images.delete_by_parent([unit_id])
        return await self.units.delete(unit_id)

    # Unit images
    async def get_unit_images(self, unit_id: int) -> List[UnitImage]:
        return await self.unit_images.get_by_parent(unit_id)

    async def get_unit_image(self, image_id: int) -> Optional[UnitImage]:
        return await self.unit_images.get_by_id(image_id)

    async def get_unit_image_by_object_key(self, object_key: str) -> Optional[UnitImage]:
        return await self.unit_images.get_by_object_key(object_key)

    async def create_unit_image(self, data: Dict[str, Any]) -> UnitImage:
        return await self.unit_images.create_image(data)

    async def update_unit_image_order(self, image_id: int, display_order: int) -> Optional[UnitImage]:
        return await self.unit_images.update(image_id, {"display_order": display_order})

    async def update_unit_image_featured(self, image_id: int, is_featured: bool) -> Optional[UnitImage]:
        return await self.unit_images.update_featured(image_id, is_featured)

    async def update_unit_image_object_key(
        self, image_id: int, object_key: str, mime_type: str, size: int
    ) -> Optional[UnitImage]:
        return await self.unit_images.update(
            image_id, {"object_key": object_key, "mime_type": mime_type, "size": size}
        )

    async def delete_unit_image(self, image_id: int) -> bool:
        return await self.unit_images.delete(image_id)

    # Database-resident image bytes
    async def save_image_data(self, object_key: str, data: bytes, mime_type: str) -> ImageStorage:
        await self.stored_images.delete_by_object_key(object_key)
        return await self.stored_images.create(
            {"object_key": object_key, "data": data, "mime_type": mime_type, "size": len(data)}
        )

    async def get_image_data_by_object_key(self, object_key: str) -> Optional[ImageStorage]:
        return await self.stored_images.get_by_object_key(object_key)

    async def delete_image_data_by_object_key(self, object_key: str) -> bool:
        return await self.stored_images.delete_by_object_key(object_key)

    async def get_all_stored_images(self) -> List[ImageStorage]:
        return await self.stored_images.get_multi()

    async def ping(self) -> bool:
        try:
            await self.db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False
