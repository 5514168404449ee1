"""
Storage interface shared by the in-memory and relational backends.
Every method returns model instances so callers never see which backend answered.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

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


class Storage(ABC):
    """
    CRUD operations over every catalog, listing, gallery and inquiry entity.
    Both implementations must produce the same observable results.
    """

    backend_name: str = "storage"

    # Locations
    @abstractmethod
    async def get_locations(self) -> List[Location]: ...

    @abstractmethod
    async def get_location(self, location_id: int) -> Optional[Location]: ...

    @abstractmethod
    async def get_location_by_slug(self, slug: str) -> Optional[Location]: ...

    @abstractmethod
    async def create_location(self, data: Dict[str, Any]) -> Location: ...

    @abstractmethod
    async def update_location(self, location_id: int, data: Dict[str, Any]) -> Optional[Location]: ...

    # Neighborhoods
    @abstractmethod
    async def get_neighborhood_by_location_id(self, location_id: int) -> Optional[Neighborhood]: ...

    @abstractmethod
    async def create_neighborhood(self, data: Dict[str, Any]) -> Neighborhood: ...

    @abstractmethod
    async def update_neighborhood(self, neighborhood_id: int, data: Dict[str, Any]) -> Optional[Neighborhood]: ...

    # Features
    @abstractmethod
    async def get_features(self) -> List[Feature]: ...

    @abstractmethod
    async def create_feature(self, data: Dict[str, Any]) -> Feature: ...

    # Properties
    @abstractmethod
    async def get_properties(self) -> List[Property]: ...

    @abstractmethod
    async def get_properties_by_location(self, location_id: int) -> List[Property]: ...

    @abstractmethod
    async def get_property(self, property_id: int) -> Optional[Property]: ...

    @abstractmethod
    async def create_property(self, data: Dict[str, Any]) -> Property: ...

    @abstractmethod
    async def update_property(self, property_id: int, data: Dict[str, Any]) -> Optional[Property]: ...

    @abstractmethod
    async def delete_property(self, property_id: int) -> bool:
        """Delete a property together with its units, unit images and images."""

    # Inquiries
    @abstractmethod
    async def get_inquiries(self) -> List[Inquiry]:
        """All inquiries, newest first."""

    @abstractmethod
    async def get_inquiry(self, inquiry_id: int) -> Optional[Inquiry]: ...

    @abstractmethod
    async def create_inquiry(self, data: Dict[str, Any]) -> Inquiry: ...

    @abstractmethod
    async def update_inquiry_status(self, inquiry_id: int, status: str) -> Optional[Inquiry]: ...

    # Property images
    @abstractmethod
    async def get_property_images(self, offset: int = 0, limit: Optional[int] = None) -> Tuple[List[PropertyImage], int]:
        """A page of every property image and the total count."""

    @abstractmethod
    async def get_property_images_by_property(self, property_id: int) -> List[PropertyImage]: ...

    @abstractmethod
    async def get_property_image(self, image_id: int) -> Optional[PropertyImage]: ...

    @abstractmethod
    async def get_property_image_by_object_key(self, object_key: str) -> Optional[PropertyImage]: ...

    @abstractmethod
    async def create_property_image(self, data: Dict[str, Any]) -> PropertyImage: ...

    @abstractmethod
    async def update_property_image_order(self, image_id: int, display_order: int) -> Optional[PropertyImage]: ...

    @abstractmethod
    async def update_property_image_featured(self, image_id: int, is_featured: bool) -> Optional[PropertyImage]:
        """Set the flag; setting it clears every sibling first."""

    @abstractmethod
    async def update_property_image_object_key(
        self, image_id: int, object_key: str, mime_type: str, size: int
    ) -> Optional[PropertyImage]: ...

    @abstractmethod
    async def delete_property_image(self, image_id: int) -> bool: ...

    # Property units
    @abstractmethod
    async def get_all_property_units(self) -> List[PropertyUnit]: ...

    @abstractmethod
    async def get_property_units(self, property_id: int) -> List[PropertyUnit]:
        """Units of a property sorted by unit number."""

    @abstractmethod
    async def get_property_unit(self, unit_id: int) -> Optional[PropertyUnit]: ...

    @abstractmethod
    async def create_property_unit(self, data: Dict[str, Any]) -> PropertyUnit: ...

    @abstractmethod
    async def update_property_unit(self, unit_id: int, data: Dict[str, Any]) -> Optional[PropertyUnit]: ...

    @abstractmethod
    async def delete_property_unit(self, unit_id: int) -> bool:
        """Delete a unit together with its images."""

    # Unit images
    @abstractmethod
    async def get_unit_images(self, unit_id: int) -> List[UnitImage]: ...

    @abstractmethod
    async def get_unit_image(self, image_id: int) -> Optional[UnitImage]: ...

    @abstractmethod
    async def get_unit_image_by_object_key(self, object_key: str) -> Optional[UnitImage]: ...

    @abstractmethod
    async def create_unit_image(self, data: Dict[str, Any]) -> UnitImage: ...

    @abstractmethod
    async def update_unit_image_order(self, image_id: int, display_order: int) -> Optional[UnitImage]: ...

    @abstractmethod
    async def update_unit_image_featured(self, image_id: int, is_featured: bool) -> Optional[UnitImage]: ...

    @abstractmethod
    async def update_unit_image_object_key(
        self, image_id: int, object_key: str, mime_type: str, size: int
    ) -> Optional[UnitImage]: ...

    @abstractmethod
    async def delete_unit_image(self, image_id: int) -> bool: ...

    # Database-resident image bytes
    @abstractmethod
    async def save_image_data(self, object_key: str, data: bytes, mime_type: str) -> ImageStorage:
        """Store bytes under a key, replacing any previous copy."""

    @abstractmethod
    async def get_image_data_by_object_key(self, object_key: str) -> Optional[ImageStorage]: ...

    @abstractmethod
    async def delete_image_data_by_object_key(self, object_key: str) -> bool: ...

    @abstractmethod
    async def get_all_stored_images(self) -> List[ImageStorage]: ...

    async def ping(self) -> bool:
        """Whether the backend is reachable."""
        return True
