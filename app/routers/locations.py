"""
Location API endpoints: the location catalog, its properties and neighborhood guides.
"""

from fastapi import APIRouter, Depends, Path, status
from typing import List

from app.schemas.error import get_error_responses
from app.schemas.location import (
    LocationCreate,
    LocationUpdate,
    LocationResponse,
    NeighborhoodCreate,
    NeighborhoodUpdate,
    NeighborhoodResponse,
)
from app.schemas.property import PropertyResponse
from app.services.catalog import CatalogService
from app.utils.dependencies import get_catalog_service


router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get(
    "",
    response_model=List[LocationResponse],
    summary="List locations"
)
async def list_locations(
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    """Get every location."""
    return await catalog_service.list_locations()


@router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create location",
    responses=get_error_responses(400, 409)
)
async def create_location(
    location_data: LocationCreate,
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    """
    Create a new location.

    Raises:
        DuplicateResourceError: If the slug is already taken
    """
    return await catalog_service.create_location(location_data)


@router.get(
    "/{slug}",
    response_model=LocationResponse,
    summary="Get location by slug",
    responses=get_error_responses(404)
)
async def get_location(
    slug: str = Path(..., description="Location slug"),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return await catalog_service.get_location(slug)


@router.patch(
    "/{slug}",
    response_model=LocationResponse,
    summary="Update location",
    description="Partially update a location. The slug cannot be changed.",
    responses=get_error_responses(400, 404)
)
async def update_location(
    location_data: LocationUpdate,
    slug: str = Path(..., description="Location slug"),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return await catalog_service.update_location(slug, location_data)


@router.get(
    "/{slug}/properties",
    response_model=List[PropertyResponse],
    summary="List properties in a location",
    responses=get_error_responses(404)
)
async def list_location_properties(
    slug: str = Path(..., description="Location slug"),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return await catalog_service.list_location_properties(slug)


@router.get(
    "/{slug}/neighborhood",
    response_model=NeighborhoodResponse,
    summary="Get neighborhood guide",
    responses=get_error_responses(404)
)
async def get_neighborhood(
    slug: str = Path(..., description="Location slug"),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    """
    Get the neighborhood guide of a location.

    Raises:
        LocationNotFoundError: If the location is missing
        NotFoundError: If the location has no guide
    """
    return await catalog_service.get_neighborhood(slug)


@router.post(
    "/{slug}/neighborhood",
    response_model=NeighborhoodResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create neighborhood guide",
    responses=get_error_responses(400, 404, 409)
)
async def create_neighborhood(
    neighborhood_data: NeighborhoodCreate,
    slug: str = Path(..., description="Location slug"),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return await catalog_service.create_neighborhood(slug, neighborhood_data)


@router.patch(
    "/{slug}/neighborhood",
    response_model=NeighborhoodResponse,
    summary="Update neighborhood guide",
    responses=get_error_responses(400, 404)
)
async def update_neighborhood(
    neighborhood_data: NeighborhoodUpdate,
    slug: str = Path(..., description="Location slug"),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return await catalog_service.update_neighborhood(slug, neighborhood_data)
