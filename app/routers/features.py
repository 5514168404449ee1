"""
Feature card API endpoints.
"""

from fastapi import APIRouter, Depends, status
from typing import List

from app.schemas.error import get_error_responses
from app.schemas.location import FeatureCreate, FeatureResponse
from app.services.catalog import CatalogService
from app.utils.dependencies import get_catalog_service


router = APIRouter(prefix="/features", tags=["Features"])


@router.get("", response_model=List[FeatureResponse], summary="List features")
async def list_features(
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return await catalog_service.list_features()


@router.post(
    "",
    response_model=FeatureResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create feature",
    responses=get_error_responses(400)
)
async def create_feature(
    feature_data: FeatureCreate,
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return await catalog_service.create_feature(feature_data)
