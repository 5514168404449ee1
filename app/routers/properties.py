"""
Property management API endpoints for listings, their galleries and units.
"""

from fastapi import APIRouter, Depends, File, Form, Path, Response, UploadFile, status
from typing import List

from app.schemas.error import get_error_responses
from app.schemas.image import PropertyImageResponse
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyUnitResponse,
)
from app.services.image import ImageService
from app.services.property import PropertyService
from app.utils.dependencies import get_image_service, get_property_service


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=List[PropertyResponse],
    summary="List properties"
)
async def list_properties(
    property_service: PropertyService = Depends(get_property_service)
):
    """Get every property listing."""
    return await property_service.list_properties()


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a new property listing in an existing location.",
    responses=get_error_responses(400, 404)
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Create a new property listing.

    Args:
        property_data: Property creation data
        property_service: Property service instance

    Returns:
        Created property

    Raises:
        NotFoundError: If the location doesn't exist
    """
    return await property_service.create_property(property_data)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get property details",
    responses=get_error_responses(400, 404)
)
async def get_property(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    return await property_service.get_property(property_id)


@router.patch(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Partially update a property. Only the fields sent are changed.",
    responses=get_error_responses(400, 404)
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    return await property_service.update_property(property_id, property_data)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    description="Delete a property together with its units and images.",
    responses=get_error_responses(404)
)
async def delete_property(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    await property_service.delete_property(property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{property_id}/images",
    response_model=List[PropertyImageResponse],
    summary="List property images",
    description="Images of a property sorted by display order.",
    responses=get_error_responses(404)
)
async def list_property_images(
    property_id: int = Path(..., description="Property ID"),
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.list_images_for_property(property_id)


@router.post(
    "/{property_id}/images/upload",
    response_model=PropertyImageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload property image",
    description="Upload an image file into object storage and add it to the property gallery. "
                "Supports JPEG, PNG, GIF and WebP.",
    responses=get_error_responses(400, 404, 500)
)
async def upload_property_image(
    property_id: int = Path(..., description="Property ID"),
    file: UploadFile = File(..., description="Image file to upload"),
    alt: str = Form("", description="Alternative text"),
    display_order: int = Form(0, ge=0, alias="displayOrder", description="Display order in the gallery"),
    is_featured: bool = Form(False, alias="isFeatured", description="Set as the featured image"),
    image_service: ImageService = Depends(get_image_service)
):
    """
    Upload a single image for a property.

    Raises:
        PropertyNotFoundError: If the property doesn't exist
        ValidationError: If the file is not an accepted image
    """
    return await image_service.upload_property_image(
        property_id,
        file,
        alt=alt,
        display_order=display_order,
        is_featured=is_featured,
    )


@router.get(
    "/{property_id}/units",
    response_model=List[PropertyUnitResponse],
    summary="List property units",
    description="Units of a multifamily property sorted by unit number.",
    responses=get_error_responses(404)
)
async def list_property_units(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    return await property_service.list_units(property_id)
