"""
Property unit API endpoints for multifamily listings and unit galleries.
"""

from fastapi import APIRouter, Depends, File, Form, Path, Response, UploadFile, status
from typing import List

from app.schemas.error import get_error_responses
from app.schemas.image import UnitImageResponse
from app.schemas.property import PropertyUnitCreate, PropertyUnitUpdate, PropertyUnitResponse
from app.services.image import ImageService
from app.services.property import PropertyService
from app.utils.dependencies import get_image_service, get_property_service


router = APIRouter(prefix="/property-units", tags=["Units"])


@router.post(
    "",
    response_model=PropertyUnitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create unit",
    description="Add a unit to a multifamily property.",
    responses=get_error_responses(400, 404)
)
async def create_unit(
    unit_data: PropertyUnitCreate,
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Add a unit to a property.

    Raises:
        PropertyNotFoundError: If the property doesn't exist
        BusinessRuleViolationError: If the property is not multifamily
    """
    return await property_service.create_unit(unit_data)


@router.get(
    "/{unit_id}",
    response_model=PropertyUnitResponse,
    summary="Get unit",
    responses=get_error_responses(400, 404)
)
async def get_unit(
    unit_id: int = Path(..., description="Unit ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    return await property_service.get_unit(unit_id)


@router.patch(
    "/{unit_id}",
    response_model=PropertyUnitResponse,
    summary="Update unit",
    responses=get_error_responses(400, 404)
)
async def update_unit(
    unit_data: PropertyUnitUpdate,
    unit_id: int = Path(..., description="Unit ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    return await property_service.update_unit(unit_id, unit_data)


@router.delete(
    "/{unit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete unit",
    description="Delete a unit together with its images.",
    responses=get_error_responses(404)
)
async def delete_unit(
    unit_id: int = Path(..., description="Unit ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    await property_service.delete_unit(unit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{unit_id}/images",
    response_model=List[UnitImageResponse],
    summary="List unit images",
    responses=get_error_responses(404)
)
async def list_unit_images(
    unit_id: int = Path(..., description="Unit ID"),
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.list_unit_images(unit_id)


@router.post(
    "/{unit_id}/images/upload",
    response_model=UnitImageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload unit image",
    responses=get_error_responses(400, 404, 500)
)
async def upload_unit_image(
    unit_id: int = Path(..., description="Unit ID"),
    file: UploadFile = File(..., description="Image file to upload"),
    alt: str = Form("", description="Alternative text"),
    display_order: int = Form(0, ge=0, alias="displayOrder"),
    is_featured: bool = Form(False, alias="isFeatured"),
    image_service: ImageService = Depends(get_image_service)
):
    """Upload a single image for a unit."""
    return await image_service.upload_unit_image(
        unit_id,
        file,
        alt=alt,
        display_order=display_order,
        is_featured=is_featured,
    )
