"""
Pydantic schemas for locations, neighborhood guides and feature cards.
"""

from pydantic import Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime
import re

from app.schemas.common import CamelModel, UpdateModel

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class LocationBase(CamelModel):
    """Fields shared by location create and response schemas."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name of the location",
        examples=["Midtown, Atlanta"]
    )

    description: str = Field(..., description="Marketing description of the location")

    image_url: str = Field(..., description="Hero image URL", examples=["https://i.imgur.com/THKfFjB.png"])

    link_text: str = Field(
        ...,
        max_length=255,
        description="Call-to-action text",
        examples=["View Midtown Properties"]
    )


class LocationCreate(LocationBase):
    """Schema for creating a location."""

    slug: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique URL identifier; cannot be changed later",
        examples=["midtown"]
    )

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v):
        """Slugs are lowercase words joined by hyphens."""
        if not SLUG_PATTERN.match(v):
            raise ValueError("Slug must contain lowercase letters, digits and single hyphens")
        return v


class LocationUpdate(UpdateModel):
    """Schema for updating a location. The slug is immutable and not accepted."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = None
    link_text: Optional[str] = Field(None, max_length=255)


class LocationResponse(LocationBase):
    """Schema for location responses."""

    id: int
    slug: str


class Hotspot(CamelModel):
    """A point of interest in a neighborhood's explore section."""

    name: str
    description: str = ""
    distance: str = ""
    image_url: Optional[str] = None
    link: Optional[str] = None


class NeighborhoodBase(CamelModel):
    """Free-text neighborhood guide fields."""

    map_image_url: Optional[str] = None
    highlights: Optional[str] = None
    attractions: Optional[str] = None
    transportation_info: Optional[str] = None
    dining_options: Optional[str] = None
    schools_info: Optional[str] = None
    parks_and_recreation: Optional[str] = None
    historical_info: Optional[str] = None
    explore_description: Optional[str] = None
    explore_map_url: Optional[str] = None
    explore_hotspots: Optional[str] = Field(
        None,
        description="JSON-encoded array of {name, description, distance, imageUrl, link}"
    )


class NeighborhoodCreate(NeighborhoodBase):
    """
    Schema for creating a neighborhood guide.
    Hotspots may be sent either pre-encoded in exploreHotspots or as a list.
    """

    hotspots: Optional[List[Hotspot]] = Field(
        None,
        description="Hotspots as objects; encoded into exploreHotspots when given"
    )


class NeighborhoodUpdate(UpdateModel):
    """Schema for partially updating a neighborhood guide."""

    nullable_fields = frozenset({
        "map_image_url",
        "highlights",
        "attractions",
        "transportation_info",
        "dining_options",
        "schools_info",
        "parks_and_recreation",
        "historical_info",
        "explore_description",
        "explore_map_url",
        "explore_hotspots",
        "hotspots",
    })

    map_image_url: Optional[str] = None
    highlights: Optional[str] = None
    attractions: Optional[str] = None
    transportation_info: Optional[str] = None
    dining_options: Optional[str] = None
    schools_info: Optional[str] = None
    parks_and_recreation: Optional[str] = None
    historical_info: Optional[str] = None
    explore_description: Optional[str] = None
    explore_map_url: Optional[str] = None
    explore_hotspots: Optional[str] = None
    hotspots: Optional[List[Hotspot]] = None


class NeighborhoodResponse(NeighborhoodBase):
    """Schema for neighborhood responses, with hotspots decoded."""

    id: int
    location_id: int
    hotspots: List[Hotspot] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class FeatureCreate(CamelModel):
    """Schema for creating a feature card."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Historic Character"])
    description: str
    icon: str = Field(..., min_length=1, max_length=100, examples=["fa-landmark"])


class FeatureResponse(FeatureCreate):
    """Schema for feature card responses."""

    id: int


def hotspots_to_dicts(hotspots: List[Hotspot]) -> List[Dict[str, Any]]:
    """Convert hotspot models to the stored camelCase shape."""
    return [hotspot.model_dump(by_alias=True) for hotspot in hotspots]
