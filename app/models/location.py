"""
Location, Neighborhood and Feature models for the public catalog.
Neighborhood stores its explore hotspots as a JSON-encoded text column.
"""

from sqlalchemy import String, Text, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
import logging

logger = logging.getLogger(__name__)

HOTSPOT_FIELDS = ("name", "description", "distance", "imageUrl", "link")


class Location(Base):
    """
    Location model for a marketed area such as a city neighborhood.
    The slug is the public identifier and never changes after creation.
    """

    __tablename__ = "locations"

    slug: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="URL-safe unique identifier of the location"
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the location"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Marketing description of the location"
    )

    image_url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Hero image for the location card"
    )

    link_text: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Call-to-action text for the location card"
    )

    def __repr__(self) -> str:
        """String representation of the location."""
        return f"<Location(id={self.id}, slug={self.slug})>"


class Neighborhood(Base):
    """
    Neighborhood guide attached one-to-one to a Location.
    """

    __tablename__ = "neighborhoods"

    location_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        unique=True,
        index=True,
        comment="ID of the location this guide describes"
    )

    map_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    highlights: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    attractions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    transportation_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    dining_options: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    schools_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    parks_and_recreation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    historical_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Explore section
    explore_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    explore_map_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    explore_hotspots: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="JSON array of {name, description, distance, imageUrl, link}"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation of the neighborhood."""
        return f"<Neighborhood(id={self.id}, location_id={self.location_id})>"

    @property
    def hotspots(self) -> List[Dict[str, Any]]:
        """Decoded explore hotspots; empty when missing or malformed."""
        return parse_hotspots(self.explore_hotspots)


def parse_hotspots(raw: Optional[str]) -> List[Dict[str, Any]]:
    """
    Decode a stored hotspots JSON string.

    Args:
        raw: JSON-encoded array of hotspot objects

    Returns:
        List of hotspot dictionaries, empty if the value cannot be decoded
    """
    if not raw:
        return []

    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Ignoring malformed explore hotspots: {e}")
        return []

    if not isinstance(value, list):
        return []

    return [item for item in value if isinstance(item, dict)]


def dump_hotspots(hotspots: List[Dict[str, Any]]) -> str:
    """Encode hotspots in the stored JSON shape."""
    return json.dumps(
        [{key: item.get(key) for key in HOTSPOT_FIELDS if key in item} for item in hotspots]
    )


class Feature(Base):
    """Feature card shown on the landing page."""

    __tablename__ = "features"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Icon class name, e.g. fa-landmark"
    )
