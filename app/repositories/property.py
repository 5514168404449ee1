"""
Property and unit repositories.
Listings are returned in id order and units in unit-number order.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.models.property import Property, PropertyUnit
from app.repositories.base import BaseRepository
from typing import List
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """Repository for Property listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def get_by_location(self, location_id: int) -> List[Property]:
        """
        Get every property in a location.

        Args:
            location_id: ID of the location

        Returns:
            Properties ordered by id
        """
        return await self.get_multi(filters={"location_id": location_id})


class PropertyUnitRepository(BaseRepository[PropertyUnit]):
    """Repository for units of multifamily properties."""

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyUnit, db)

    async def get_by_property(self, property_id: int) -> List[PropertyUnit]:
        """Units of a property sorted by unit number."""
        return await self.get_multi(
            filters={"property_id": property_id},
            order_by=("unit_number", "id")
        )

    async def get_ids_by_property(self, property_id: int) -> List[int]:
        """IDs of every unit of a property."""
        return [unit.id for unit in await self.get_by_property(property_id)]
