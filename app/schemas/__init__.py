"""
Pydantic schemas for request/response validation.
"""

# Catalog schemas
from .location import (
    LocationCreate,
    LocationUpdate,
    LocationResponse,
    Hotspot,
    NeighborhoodCreate,
    NeighborhoodUpdate,
    NeighborhoodResponse,
    FeatureCreate,
    FeatureResponse,
)

# Property schemas
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyUnitCreate,
    PropertyUnitUpdate,
    PropertyUnitResponse,
)

# Image schemas
from .image import (
    PropertyImageCreate,
    PropertyImageResponse,
    UnitImageCreate,
    UnitImageResponse,
    ImageOrderUpdate,
    ImageFeaturedUpdate,
    StoredImage,
    StoredImageCounts,
    StoredImageListResponse,
)

# Inquiry schemas
from .inquiry import InquiryCreate, InquiryStatusUpdate, InquiryResponse

__all__ = [
    # Catalog
    "LocationCreate",
    "LocationUpdate",
    "LocationResponse",
    "Hotspot",
    "NeighborhoodCreate",
    "NeighborhoodUpdate",
    "NeighborhoodResponse",
    "FeatureCreate",
    "FeatureResponse",

    # Property
    "PropertyBase",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyUnitCreate",
    "PropertyUnitUpdate",
    "PropertyUnitResponse",

    # Image
    "PropertyImageCreate",
    "PropertyImageResponse",
    "UnitImageCreate",
    "UnitImageResponse",
    "ImageOrderUpdate",
    "ImageFeaturedUpdate",
    "StoredImage",
    "StoredImageCounts",
    "StoredImageListResponse",

    # Inquiry
    "InquiryCreate",
    "InquiryStatusUpdate",
    "InquiryResponse",
]
