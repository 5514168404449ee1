"""
Pydantic schemas for property and unit requests and responses.
Handles listing CRUD payloads and field validation.
"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from app.schemas.common import CamelModel, UpdateModel


def _validate_half_steps(v):
    """Bathrooms are counted in halves and stored with one decimal."""
    if v is None:
        return v
    if v < 0:
        raise ValueError("Bathrooms cannot be negative")
    if round(v * 2) != v * 2:
        raise ValueError("Bathrooms must be a multiple of 0.5")
    return float(v)


class PropertyBase(CamelModel):
    """Base property schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Listing name",
        examples=["253 14th St NE"]
    )

    description: str = Field(..., description="Detailed property description")

    address: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Full property address",
        examples=["253 14th St NE, Atlanta, GA 30309"]
    )

    bedrooms: int = Field(..., ge=0, le=50, description="Number of bedrooms", examples=[2])

    bathrooms: float = Field(..., ge=0, le=50, description="Number of bathrooms", examples=[1.5])

    sqft: int = Field(..., ge=0, description="Interior square footage", examples=[1000])

    rent: Optional[int] = Field(None, ge=0, description="Monthly rent in dollars", examples=[1650])

    available: bool = Field(True, description="Whether the property is available")

    location_id: int = Field(..., gt=0, description="ID of the location")

    image_url: str = Field(..., description="Main listing image")

    features: str = Field(..., description="Comma-separated amenities")

    property_type: str = Field(
        "multi-family",
        min_length=1,
        max_length=50,
        description="Property type tag",
        examples=["house"]
    )

    is_multifamily: bool = Field(False, description="Whether the property is divided into units")

    unit_count: int = Field(0, ge=0, description="Number of units for multifamily properties")

    @field_validator("bathrooms")
    @classmethod
    def validate_bathrooms(cls, v):
        """Validate bathroom count."""
        return _validate_half_steps(v)


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""


class PropertyUpdate(UpdateModel):
    """Schema for updating an existing property. All fields are optional."""

    nullable_fields = frozenset({"rent"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[float] = Field(None, ge=0, le=50)
    sqft: Optional[int] = Field(None, ge=0)
    rent: Optional[int] = Field(None, ge=0)
    available: Optional[bool] = None
    location_id: Optional[int] = Field(None, gt=0)
    image_url: Optional[str] = None
    features: Optional[str] = None
    property_type: Optional[str] = Field(None, min_length=1, max_length=50)
    is_multifamily: Optional[bool] = None
    unit_count: Optional[int] = Field(None, ge=0)

    @field_validator("bathrooms")
    @classmethod
    def validate_bathrooms(cls, v):
        """Validate bathroom count."""
        return _validate_half_steps(v)


class PropertyResponse(PropertyBase):
    """Schema for property responses."""

    id: int


class PropertyUnitBase(CamelModel):
    """Fields shared by unit create and response schemas."""

    unit_number: str = Field(..., min_length=1, max_length=50, examples=["101"])
    bedrooms: int = Field(..., ge=0, le=50)
    bathrooms: float = Field(..., ge=0, le=50)
    sqft: int = Field(..., ge=0)
    rent: Optional[int] = Field(None, ge=0)
    available: bool = True
    description: str = ""
    features: str = ""

    @field_validator("bathrooms")
    @classmethod
    def validate_bathrooms(cls, v):
        """Validate bathroom count."""
        return _validate_half_steps(v)


class PropertyUnitCreate(PropertyUnitBase):
    """Schema for adding a unit to a multifamily property."""

    property_id: int = Field(..., gt=0)


class PropertyUnitUpdate(UpdateModel):
    """Schema for partially updating a unit."""

    nullable_fields = frozenset({"rent"})

    unit_number: Optional[str] = Field(None, min_length=1, max_length=50)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[float] = Field(None, ge=0, le=50)
    sqft: Optional[int] = Field(None, ge=0)
    rent: Optional[int] = Field(None, ge=0)
    available: Optional[bool] = None
    description: Optional[str] = None
    features: Optional[str] = None

    @field_validator("bathrooms")
    @classmethod
    def validate_bathrooms(cls, v):
        """Validate bathroom count."""
        return _validate_half_steps(v)


class PropertyUnitResponse(PropertyUnitBase):
    """Schema for unit responses."""

    id: int
    property_id: int
    created_at: Optional[datetime] = None
