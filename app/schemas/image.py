"""
Pydantic schemas for gallery images and object storage listings.
Image responses carry the resolved URL of their stored reference.
"""

from pydantic import Field, StrictBool, StrictInt, computed_field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime

from app.schemas.common import CamelModel
from app.utils.image_refs import resolve_image_ref


def _validate_external_url(v):
    if v is not None and not v.startswith("http"):
        raise ValueError("Image URL must start with http or https")
    return v


class GalleryImageBase(CamelModel):
    """Fields shared by every gallery image payload."""

    alt: str = Field("", max_length=500, description="Alternative text")

    display_order: int = Field(0, ge=0, description="Sort position within the gallery")

    is_featured: bool = Field(False, description="Whether this is the featured image")


class PropertyImageCreate(GalleryImageBase):
    """Schema for attaching an externally hosted image to a property."""

    property_id: int = Field(..., gt=0)

    url: str = Field(
        ...,
        description="External image URL",
        examples=["https://i.imgur.com/O9Fu46o.png"]
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        """Only external URLs can be attached directly."""
        return _validate_external_url(v)


class UnitImageCreate(GalleryImageBase):
    """
    Schema for adding a unit image.
    Either data (a base64 data URL, uploaded to object storage) or an external url is required.
    """

    unit_id: int = Field(..., gt=0)

    url: Optional[str] = Field(None, description="External image URL")

    data: Optional[str] = Field(
        None,
        description="Base64 data URL such as data:image/png;base64,...",
    )

    filename: Optional[str] = Field(None, max_length=255, description="Original filename of the uploaded data")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        """Only external URLs can be attached directly."""
        return _validate_external_url(v)

    @model_validator(mode="after")
    def validate_source(self):
        """Require image data or an external URL."""
        if not self.data and not self.url:
            raise ValueError("Either image data or a valid URL is required")
        return self


class ImageOrderUpdate(CamelModel):
    """Schema for moving an image within its gallery."""

    display_order: StrictInt = Field(..., ge=0)


class ImageFeaturedUpdate(CamelModel):
    """Schema for setting or clearing the featured flag."""

    is_featured: StrictBool


class GalleryImageResponse(GalleryImageBase):
    """Fields shared by gallery image responses."""

    id: int
    url: Optional[str] = None
    object_key: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def image_ref(self) -> Optional[str]:
        return self.object_key or self.url

    @computed_field
    @property
    def resolved_url(self) -> str:
        """URL that serves the image bytes."""
        return resolve_image_ref(self.image_ref).url

    @computed_field
    @property
    def source_type(self) -> str:
        """Where the image bytes come from."""
        return resolve_image_ref(self.image_ref).source_type


class PropertyImageResponse(GalleryImageResponse):
    """Schema for property image responses."""

    property_id: int


class UnitImageResponse(GalleryImageResponse):
    """Schema for unit image responses."""

    unit_id: int


class StoredImage(CamelModel):
    """An object stored in the blob store."""

    key: str
    url: str
    source: str = "object-storage"


class StoredImageCounts(CamelModel):
    """Number of images per storage location."""

    database: int = 0
    object_storage: int = 0
    total: int = 0


class StoredImageListResponse(CamelModel):
    """Schema for the object storage listing."""

    images: List[StoredImage]
    counts: StoredImageCounts
