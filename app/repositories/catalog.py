"""
Repositories for the public catalog: locations, neighborhoods and feature cards.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.models.location import Location, Neighborhood, Feature
from app.repositories.base import BaseRepository
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class LocationRepository(BaseRepository[Location]):
    """Repository for Location rows."""

    def __init__(self, db: AsyncSession):
        super().__init__(Location, db)

    async def get_by_slug(self, slug: str) -> Optional[Location]:
        """
        Get a location by its slug.

        Args:
            slug: Unique location slug

        Returns:
            Location if found, None otherwise
        """
        return await self.get_by_field("slug", slug)


class NeighborhoodRepository(BaseRepository[Neighborhood]):
    """Repository for Neighborhood guides, one per location."""

    def __init__(self, db: AsyncSession):
        super().__init__(Neighborhood, db)

    async def get_by_location_id(self, location_id: int) -> Optional[Neighborhood]:
        """Get the guide attached to a location."""
        return await self.get_by_field("location_id", location_id)


class FeatureRepository(BaseRepository[Feature]):
    """Repository for landing page feature cards."""

    def __init__(self, db: AsyncSession):
        super().__init__(Feature, db)
