"""
In-memory storage backend.
Each entity lives in its own table keyed by an auto-incrementing id. An instance
is created explicitly and handed to request handlers through dependency injection.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Tuple, Type, TypeVar
import logging

from app.database import Base
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
from app.storage.base import Storage

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=Base)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryTable(Generic[RecordType]):
    """Rows of one model keyed by id, with the model's column defaults applied on insert."""

    def __init__(self, model: Type[RecordType]):
        self.model = model
        self.rows: Dict[int, RecordType] = {}
        self.next_id = 1

    def insert(self, data: Dict[str, Any]) -> RecordType:
        record = self.model(**data)
        for column in self.model.__table__.columns:
            if getattr(record, column.key, None) is not None:
                continue
            if column.default is not None and column.default.is_scalar:
                setattr(record, column.key, column.default.arg)
            elif column.key == "created_at":
                setattr(record, column.key, _utcnow())

        record.id = self.next_id
        self.next_id += 1
        self.rows[record.id] = record
        logger.debug(f"Inserted {self.model.__name__} with id: {record.id}")
        return record

    def get(self, record_id: int) -> Optional[RecordType]:
        return self.rows.get(record_id)

    def find(self, **criteria: Any) -> Optional[RecordType]:
        return next(iter(self.filter(**criteria)), None)

    def filter(self, **criteria: Any) -> List[RecordType]:
        return [
            row for row in self.rows.values()
            if all(getattr(row, field) == value for field, value in criteria.items())
        ]

    def update(self, record_id: int, data: Dict[str, Any]) -> Optional[RecordType]:
        record = self.rows.get(record_id)
        if record is None:
            return None
        for field, value in data.items():
            setattr(record, field, value)
        return record

    def delete(self, record_id: int) -> bool:
        return self.rows.pop(record_id, None) is not None

    def delete_many(self, records: Iterable[RecordType]) -> int:
        ids = [record.id for record in records]
        for record_id in ids:
            self.rows.pop(record_id, None)
        return len(ids)

    def all(self, key: Optional[Callable[[RecordType], Any]] = None, reverse: bool = False) -> List[RecordType]:
        return sorted(self.rows.values(), key=key or (lambda row: row.id), reverse=reverse)


def _gallery_order(image) -> Tuple[int, int]:
    return (image.display_order, image.id)


class MemoryStorage(Storage):
    """Transient storage used for demos, local development and tests."""

    backend_name = "memory"

    def __init__(self):
        self.locations: MemoryTable[Location] = MemoryTable(Location)
        self.neighborhoods: MemoryTable[Neighborhood] = MemoryTable(Neighborhood)
        self.features: MemoryTable[Feature] = MemoryTable(Feature)
        self.properties: MemoryTable[Property] = MemoryTable(Property)
        self.units: MemoryTable[PropertyUnit] = MemoryTable(PropertyUnit)
        self.property_images: MemoryTable[PropertyImage] = MemoryTable(PropertyImage)
        self.unit_images: MemoryTable[UnitImage] = MemoryTable(UnitImage)
        self.stored_images: MemoryTable[ImageStorage] = MemoryTable(ImageStorage)
        self.inquiries: MemoryTable[Inquiry] = MemoryTable(Inquiry)

    # Locations
    async def get_locations(self) -> List[Location]:
        return self.locations.all()

    async def get_location(self, location_id: int) -> Optional[Location]:
        return self.locations.get(location_id)

    async def get_location_by_slug(self, slug: str) -> Optional[Location]:
        return self.locations.find(slug=slug)

    async def create_location(self, data: Dict[str, Any]) -> Location:
        return self.locations.insert(data)

    async def update_location(self, location_id: int, data: Dict[str, Any]) -> Optional[Location]:
        return self.locations.update(location_id, data)

    # Neighborhoods
    async def get_neighborhood_by_location_id(self, location_id: int) -> Optional[Neighborhood]:
        return self.neighborhoods.find(location_id=location_id)

    async def create_neighborhood(self, data: Dict[str, Any]) -> Neighborhood:
        return self.neighborhoods.insert(data)

    async def update_neighborhood(self, neighborhood_id: int, data: Dict[str, Any]) -> Optional[Neighborhood]:
        return self.neighborhoods.update(neighborhood_id, data)

    # Features
    async def get_features(self) -> List[Feature]:
        return self.features.all()

    async def create_feature(self, data: Dict[str, Any]) -> Feature:
        return self.features.insert(data)

    # Properties
    async def get_properties(self) -> List[Property]:
        return self.properties.all()

    async def get_properties_by_location(self, location_id: int) -> List[Property]:
        return sorted(self.properties.filter(location_id=location_id), key=lambda row: row.id)

    async def get_property(self, property_id: int) -> Optional[Property]:
        return self.properties.get(property_id)

    async def create_property(self, data: Dict[str, Any]) -> Property:
        return self.properties.insert(data)

    async def update_property(self, property_id: int, data: Dict[str, Any]) -> Optional[Property]:
        return self.properties.update(property_id, data)

    async def delete_property(self, property_id: int) -> bool:
        if self.properties.get(property_id) is None:
            return False

        units = self.units.filter(property_id=property_id)
        for unit in units:
            self.unit_images.delete_many(self.unit_images.filter(unit_id=unit.id))
        self.units.delete_many(units)
        self.property_images.delete_many(self.property_images.filter(property_id=property_id))
        return self.properties.delete(property_id)

    # Inquiries
    async def get_inquiries(self) -> List[Inquiry]:
        return self.inquiries.all(key=lambda row: (row.created_at, row.id), reverse=True)

    async def get_inquiry(self, inquiry_id: int) -> Optional[Inquiry]:
        return self.inquiries.get(inquiry_id)

    async def create_inquiry(self, data: Dict[str, Any]) -> Inquiry:
        return self.inquiries.insert(data)

    async def update_inquiry_status(self, inquiry_id: int, status: str) -> Optional[Inquiry]:
        return self.inquiries.update(inquiry_id, {"status": status})

    # Property images
    async def get_property_images(self, offset: int = 0, limit: Optional[int] = None) -> Tuple[List[PropertyImage], int]:
        images = self.property_images.all()
        page = images[offset:] if limit is None else images[offset:offset + limit]
        return page, len(images)

    async def get_property_images_by_property(self, property_id: int) -> List[PropertyImage]:
        return sorted(self.property_images.filter(property_id=property_id), key=_gallery_order)

    async def get_property_image(self, image_id: int) -> Optional[PropertyImage]:
        return self.property_images.get(image_id)

    async def get_property_image_by_object_key(self, object_key: str) -> Optional[PropertyImage]:
        return self.property_images.find(object_key=object_key)

    async def create_property_image(self, data: Dict[str, Any]) -> PropertyImage:
        if data.get("is_featured"):
            self._clear_featured(self.property_images, property_id=data["property_id"])
        return self.property_images.insert(data)

    async def update_property_image_order(self, image_id: int, display_order: int) -> Optional[PropertyImage]:
        return self.property_images.update(image_id, {"display_order": display_order})

    async def update_property_image_featured(self, image_id: int, is_featured: bool) -> Optional[PropertyImage]:
        image = self.property_images.get(image_id)
        if image is None:
            return None
        if is_featured:
            self._clear_featured(self.property_images, property_id=image.property_id)
        image.is_featured = is_featured
        return image

    async def update_property_image_object_key(
        self, image_id: int, object_key: str, mime_type: str, size: int
    ) -> Optional[PropertyImage]:
        return self.property_images.update(
            image_id, {"object_key": object_key, "mime_type": mime_type, "size": size}
        )

    async def delete_property_image(self, image_id: int) -> bool:
        return self.property_images.delete(image_id)

    # Property units
    async def get_all_property_units(self) -> List[PropertyUnit]:
        return self.units.all()

    async def get_property_units(self, property_id: int) -> List[PropertyUnit]:
        return sorted(self.units.filter(property_id=property_id), key=lambda row: (row.unit_number, row.id))

    async def get_property_unit(self, unit_id: int) -> Optional[PropertyUnit]:
        return self.units.get(unit_id)

    async def create_property_unit(self, data: Dict[str, Any]) -> PropertyUnit:
        return self.units.insert(data)

    async def update_property_unit(self, unit_id: int, data: Dict[str, Any]) -> Optional[PropertyUnit]:
        return self.units.update(unit_id, data)

    async def delete_property_unit(self, unit_id: int) -> bool:
        if self.units.get(unit_id) is None:
            return False
        self.unit_images.delete_many(self.unit_images.filter(unit_id=unit_id))
        return self.units.delete(unit_id)

    # Unit images
    async def get_unit_images(self, unit_id: int) -> List[UnitImage]:
        return sorted(self.unit_images.filter(unit_id=unit_id), key=_gallery_order)

    async def get_unit_image(self, image_id: int) -> Optional[UnitImage]:
        return self.unit_images.get(image_id)

    async def get_unit_image_by_object_key(self, object_key: str) -> Optional[UnitImage]:
        return self.unit_images.find(object_key=object_key)

    async def create_unit_image(self, data: Dict[str, Any]) -> UnitImage:
        if data.get("is_featured"):
            self._clear_featured(self.unit_images, unit_id=data["unit_id"])
        return self.unit_images.insert(data)

    async def update_unit_image_order(self, image_id: int, display_order: int) -> Optional[UnitImage]:
        return self.unit_images.update(image_id, {"display_order": display_order})

    async def update_unit_image_featured(self, image_id: int, is_featured: bool) -> Optional[UnitImage]:
        image = self.unit_images.get(image_id)
        if image is None:
            return None
        if is_featured:
            self._clear_featured(self.unit_images, unit_id=image.unit_id)
        image.is_featured = is_featured
        return image

    async def update_unit_image_object_key(
        self, image_id: int, object_key: str, mime_type: str, size: int
    ) -> Optional[UnitImage]:
        return self.unit_images.update(
            image_id, {"object_key": object_key, "mime_type": mime_type, "size": size}
        )

    async def delete_unit_image(self, image_id: int) -> bool:
        return self.unit_images.delete(image_id)

    # Database-resident image bytes
    async def save_image_data(self, object_key: str, data: bytes, mime_type: str) -> ImageStorage:
        existing = self.stored_images.find(object_key=object_key)
        if existing is not None:
            self.stored_images.delete(existing.id)
        return self.stored_images.insert(
            {"object_key": object_key, "data": data, "mime_type": mime_type, "size": len(data)}
        )

    async def get_image_data_by_object_key(self, object_key: str) -> Optional[ImageStorage]:
        return self.stored_images.find(object_key=object_key)

    async def delete_image_data_by_object_key(self, object_key: str) -> bool:
        existing = self.stored_images.find(object_key=object_key)
        if existing is None:
            return False
        return self.stored_images.delete(existing.id)

    async def get_all_stored_images(self) -> List[ImageStorage]:
        return self.stored_images.all()

    @staticmethod
    def _clear_featured(table: MemoryTable, **parent: int) -> None:
        for sibling in table.filter(**parent):
            sibling.is_featured = False
