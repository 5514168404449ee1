"""
Catalog service for locations, neighborhood guides and feature cards.
Resolves locations by slug and enforces one guide per location.
"""

from typing import List
import logging

from app.models.location import Location, Neighborhood, Feature, dump_hotspots
from app.models.property import Property
from app.schemas.location import (
    LocationCreate,
    LocationUpdate,
    NeighborhoodCreate,
    NeighborhoodUpdate,
    FeatureCreate,
    hotspots_to_dicts,
)
from app.storage.base import Storage
from app.utils.exceptions import (
    ConflictError,
    DuplicateResourceError,
    LocationNotFoundError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Service for the public catalog.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_locations(self) -> List[Location]:
        return await self.storage.get_locations()

    async def get_location(self, slug: str) -> Location:
        """
        Get a location by slug.

        Raises:
            LocationNotFoundError: If no location has the slug
        """
        location = await self.storage.get_location_by_slug(slug)
        if location is None:
            raise LocationNotFoundError(slug)
        return location

    async def create_location(self, location_data: LocationCreate) -> Location:
        """
        Create a location.

        Raises:
            DuplicateResourceError: If the slug is already taken
        """
        if await self.storage.get_location_by_slug(location_data.slug):
            raise DuplicateResourceError("Location", location_data.slug)

        location = await self.storage.create_location(location_data.model_dump())
        logger.info(f"Location created: {location.slug} (ID: {location.id})")
        return location

    async def update_location(self, slug: str, location_data: LocationUpdate) -> Location:
        """Update the mutable fields of a location."""
        location = await self.get_location(slug)
        update_data = location_data.to_update_dict()
        if not update_data:
            return location
        return await self.storage.update_location(location.id, update_data)

    async def list_location_properties(self, slug: str) -> List[Property]:
        """Properties of a location, 404 when the location is missing."""
        location = await self.get_location(slug)
        return await self.storage.get_properties_by_location(location.id)

    async def get_neighborhood(self, slug: str) -> Neighborhood:
        """
        Get the neighborhood guide of a location.

        Raises:
            LocationNotFoundError: If the location is missing
            NotFoundError: If the location has no guide
        """
        location = await self.get_location(slug)
        neighborhood = await self.storage.get_neighborhood_by_location_id(location.id)
        if neighborhood is None:
            raise NotFoundError("Neighborhood information")
        return neighborhood

    async def create_neighborhood(self, slug: str, neighborhood_data: NeighborhoodCreate) -> Neighborhood:
        """
        Create the neighborhood guide of a location.

        Raises:
            LocationNotFoundError: If the location is missing
            ConflictError: If the location already has a guide
        """
        location = await self.get_location(slug)
        if await self.storage.get_neighborhood_by_location_id(location.id):
            raise ConflictError("Neighborhood already exists for this location")

        create_data = neighborhood_data.model_dump(exclude={"hotspots"})
        if neighborhood_data.hotspots is not None:
            create_data["explore_hotspots"] = dump_hotspots(hotspots_to_dicts(neighborhood_data.hotspots))
        create_data["location_id"] = location.id

        neighborhood = await self.storage.create_neighborhood(create_data)
        logger.info(f"Neighborhood created for location {slug} (ID: {neighborhood.id})")
        return neighborhood

    async def update_neighborhood(self, slug: str, neighborhood_data: NeighborhoodUpdate) -> Neighborhood:
        """Partially update the neighborhood guide of a location."""
        neighborhood = await self.get_neighborhood(slug)

        update_data = neighborhood_data.to_update_dict()
        if "hotspots" in update_data:
            update_data.pop("hotspots")
            hotspots = neighborhood_data.hotspots
            update_data["explore_hotspots"] = (
                dump_hotspots(hotspots_to_dicts(hotspots)) if hotspots is not None else None
            )

        if not update_data:
            return neighborhood
        return await self.storage.update_neighborhood(neighborhood.id, update_data)

    async def list_features(self) -> List[Feature]:
        return await self.storage.get_features()

    async def create_feature(self, feature_data: FeatureCreate) -> Feature:
        feature = await self.storage.create_feature(feature_data.model_dump())
        logger.info(f"Feature created: {feature.title} (ID: {feature.id})")
        return feature
