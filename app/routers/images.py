"""
Image management API endpoints.
Handles gallery image rows, image ordering and featuring, and serving bytes
from object storage and from the database image table.
"""

from fastapi import APIRouter, Depends, Path, Query, Response, status
from typing import List
import math

from app.config import settings
from app.schemas.error import get_error_responses
from app.schemas.image import (
    PropertyImageCreate,
    PropertyImageResponse,
    UnitImageCreate,
    UnitImageResponse,
    ImageOrderUpdate,
    ImageFeaturedUpdate,
    StoredImageListResponse,
)
from app.services.image import ImageService
from app.utils.dependencies import get_image_service

IMAGE_CACHE_HEADERS = {"Cache-Control": "public, max-age=86400"}


def image_response(content: bytes, media_type: str) -> Response:
    """Raw image bytes cached by clients for a day."""
    return Response(content=content, media_type=media_type, headers=IMAGE_CACHE_HEADERS)


property_images_router = APIRouter(prefix="/property-images", tags=["Images"])


@property_images_router.get(
    "",
    response_model=List[PropertyImageResponse],
    summary="List property images",
    description="Paginated list of every property image. "
                "Totals are returned in the X-Total-Count and X-Total-Pages headers."
)
async def list_property_images(
    response: Response,
    page: int = Query(1, ge=1, description="Page number (starts from 1)"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Number of images per page"
    ),
    image_service: ImageService = Depends(get_image_service)
):
    images, total_count = await image_service.list_property_images(page, limit)

    total_pages = math.ceil(total_count / limit) if total_count > 0 else 1
    response.headers["X-Total-Count"] = str(total_count)
    response.headers["X-Page"] = str(page)
    response.headers["X-Limit"] = str(limit)
    response.headers["X-Total-Pages"] = str(total_pages)
    return images


@property_images_router.post(
    "",
    response_model=PropertyImageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add external property image",
    responses=get_error_responses(400, 404)
)
async def create_property_image(
    image_data: PropertyImageCreate,
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.create_property_image(image_data)


@property_images_router.patch(
    "/{image_id}/order",
    response_model=PropertyImageResponse,
    summary="Update property image order",
    responses=get_error_responses(400, 404)
)
async def update_property_image_order(
    order_data: ImageOrderUpdate,
    image_id: int = Path(..., description="Image ID"),
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.update_property_image_order(image_id, order_data.display_order)


@property_images_router.patch(
    "/{image_id}/featured",
    response_model=PropertyImageResponse,
    summary="Feature property image",
    description="Setting an image featured clears the flag on the other images of the property.",
    responses=get_error_responses(400, 404)
)
async def update_property_image_featured(
    featured_data: ImageFeaturedUpdate,
    image_id: int = Path(..., description="Image ID"),
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.update_property_image_featured(image_id, featured_data.is_featured)


@property_images_router.delete(
    "/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property image",
    responses=get_error_responses(404)
)
async def delete_property_image(
    image_id: int = Path(..., description="Image ID"),
    image_service: ImageService = Depends(get_image_service)
):
    await image_service.delete_property_image(image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@property_images_router.get(
    "/{object_key:path}",
    summary="Serve property image bytes",
    responses=get_error_responses(404)
)
async def serve_property_image(
    object_key: str,
    image_service: ImageService = Depends(get_image_service)
):
    content, media_type = await image_service.serve_property_image(object_key)
    return image_response(content, media_type)


unit_images_router = APIRouter(prefix="/unit-images", tags=["Images"])


@unit_images_router.post(
    "",
    response_model=UnitImageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add unit image",
    description="Send either a base64 data URL in data, which is uploaded to object storage, "
                "or an external url.",
    responses=get_error_responses(400, 404, 500)
)
async def create_unit_image(
    image_data: UnitImageCreate,
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.create_unit_image(image_data)


@unit_images_router.patch(
    "/{image_id}/order",
    response_model=UnitImageResponse,
    summary="Update unit image order",
    responses=get_error_responses(400, 404)
)
async def update_unit_image_order(
    order_data: ImageOrderUpdate,
    image_id: int = Path(..., description="Image ID"),
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.update_unit_image_order(image_id, order_data.display_order)


@unit_images_router.patch(
    "/{image_id}/featured",
    response_model=UnitImageResponse,
    summary="Feature unit image",
    responses=get_error_responses(400, 404)
)
async def update_unit_image_featured(
    featured_data: ImageFeaturedUpdate,
    image_id: int = Path(..., description="Image ID"),
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.update_unit_image_featured(image_id, featured_data.is_featured)


@unit_images_router.delete(
    "/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete unit image",
    responses=get_error_responses(404)
)
async def delete_unit_image(
    image_id: int = Path(..., description="Image ID"),
    image_service: ImageService = Depends(get_image_service)
):
    await image_service.delete_unit_image(image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@unit_images_router.get(
    "/{object_key:path}",
    summary="Serve unit image bytes",
    responses=get_error_responses(404)
)
async def serve_unit_image(
    object_key: str,
    image_service: ImageService = Depends(get_image_service)
):
    content, media_type = await image_service.serve_unit_image(object_key)
    return image_response(content, media_type)


object_images_router = APIRouter(prefix="/images", tags=["Object Storage"])


@object_images_router.get(
    "",
    response_model=StoredImageListResponse,
    summary="List stored images",
    description="Image keys in object storage, with counts per storage location."
)
async def list_object_images(
    image_service: ImageService = Depends(get_image_service)
):
    return await image_service.list_object_images()


@object_images_router.get(
    "/{key:path}",
    summary="Serve image from object storage",
    responses=get_error_responses(404)
)
async def serve_object_image(
    key: str,
    image_service: ImageService = Depends(get_image_service)
):
    """
    Stream a blob with a Content-Type derived from its key.

    Raises:
        ImageNotFoundError: If the blob is missing or cannot be read
    """
    content, media_type = await image_service.get_image_bytes(key)
    return image_response(content, media_type)


@object_images_router.delete(
    "/{key:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete image from object storage",
    responses=get_error_responses(404)
)
async def delete_object_image(
    key: str,
    image_service: ImageService = Depends(get_image_service)
):
    await image_service.delete_object(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


db_images_router = APIRouter(prefix="/db-images", tags=["Object Storage"])


@db_images_router.get(
    "/{key:path}",
    summary="Serve image stored in the database",
    responses=get_error_responses(404)
)
async def serve_db_image(
    key: str,
    image_service: ImageService = Depends(get_image_service)
):
    content, media_type = await image_service.get_db_image(key)
    return image_response(content, media_type)
