"""
Property service for managing listings and multifamily units.
Checks that referenced locations and properties exist before writing.
"""

from typing import List, Optional
import logging

from app.models.property import Property, PropertyUnit
from app.schemas.property import PropertyCreate, PropertyUpdate, PropertyUnitCreate, PropertyUnitUpdate
from app.services.image import ImageService
from app.storage.base import Storage
from app.utils.exceptions import (
    BusinessRuleViolationError,
    NotFoundError,
    PropertyNotFoundError,
)

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for listing and unit CRUD with business rule validation.
    """

    def __init__(self, storage: Storage, image_service: Optional[ImageService] = None):
        self.storage = storage
        self.image_service = image_service

    async def list_properties(self) -> List[Property]:
        return await self.storage.get_properties()

    async def get_property(self, property_id: int) -> Property:
        """
        Get property by ID.

        Args:
            property_id: ID of the property

        Returns:
            Property instance

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        property_obj = await self.storage.get_property(property_id)
        if property_obj is None:
            raise PropertyNotFoundError(property_id)

        logger.debug(f"Retrieved property: {property_id}")
        return property_obj

    async def create_property(self, property_data: PropertyCreate) -> Property:
        """
        Create a new property listing.

        Args:
            property_data: Property creation data

        Returns:
            Created property instance

        Raises:
            NotFoundError: If the location doesn't exist
        """
        await self._ensure_location(property_data.location_id)

        property_obj = await self.storage.create_property(property_data.model_dump())
        logger.info(f"Property created: {property_obj.name} (ID: {property_obj.id})")
        return property_obj

    async def update_property(self, property_id: int, property_data: PropertyUpdate) -> Property:
        """
        Partially update a property.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            NotFoundError: If a new location doesn't exist
        """
        property_obj = await self.get_property(property_id)

        update_data = property_data.to_update_dict()
        if not update_data:
            return property_obj

        if "location_id" in update_data:
            await self._ensure_location(update_data["location_id"])

        updated = await self.storage.update_property(property_id, update_data)
        logger.info(f"Property updated: {property_id} ({', '.join(update_data)})")
        return updated

    async def delete_property(self, property_id: int) -> None:
        """
        Delete a property, its units and every gallery image.
        Blob-stored image bytes are released on a best-effort basis.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        await self.get_property(property_id)

        if self.image_service is not None:
            await self.image_service.release_property_blobs(property_id)

        await self.storage.delete_property(property_id)
        logger.info(f"Property deleted: {property_id}")

    async def _ensure_location(self, location_id: int) -> None:
        if await self.storage.get_location(location_id) is None:
            raise NotFoundError("Location", location_id)

    # Units
    async def list_units(self, property_id: int) -> List[PropertyUnit]:
        """Units of a property sorted by unit number."""
        await self.get_property(property_id)
        return await self.storage.get_property_units(property_id)

    async def get_unit(self, unit_id: int) -> PropertyUnit:
        """
        Get a unit by ID.

        Raises:
            NotFoundError: If unit doesn't exist
        """
        unit = await self.storage.get_property_unit(unit_id)
        if unit is None:
            raise NotFoundError("Property unit", unit_id)
        return unit

    async def create_unit(self, unit_data: PropertyUnitCreate) -> PropertyUnit:
        """
        Add a unit to a multifamily property.

        Raises:
            PropertyNotFoundError: If the property doesn't exist
            BusinessRuleViolationError: If the property is not multifamily
        """
        property_obj = await self.get_property(unit_data.property_id)
        if not property_obj.is_multifamily:
            raise BusinessRuleViolationError("Cannot add units to non-multifamily property")

        unit = await self.storage.create_property_unit(unit_data.model_dump())
        logger.info(f"Unit {unit.unit_number} added to property {property_obj.id} (ID: {unit.id})")
        return unit

    async def update_unit(self, unit_id: int, unit_data: PropertyUnitUpdate) -> PropertyUnit:
        """Partially update a unit."""
        unit = await self.get_unit(unit_id)
        update_data = unit_data.to_update_dict()
        if not update_data:
            return unit
        return await self.storage.update_property_unit(unit_id, update_data)

    async def delete_unit(self, unit_id: int) -> None:
        """
        Delete a unit and its images.

        Raises:
            NotFoundError: If unit doesn't exist
        """
        await self.get_unit(unit_id)

        if self.image_service is not None:
            await self.image_service.release_unit_blobs(unit_id)

        await self.storage.delete_property_unit(unit_id)
        logger.info(f"Property unit deleted: {unit_id}")
