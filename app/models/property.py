"""
Property and PropertyUnit models for rental listings.
Handles listing details, multifamily units and location associations.
"""

from sqlalchemy import String, Text, Integer, Boolean, Numeric, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from typing import Optional
from datetime import datetime


class Property(Base):
    """
    Property model for rental listings.
    Belongs to a Location; multifamily properties may carry units.
    """

    __tablename__ = "properties"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Listing name, usually the street address"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed property description"
    )

    address: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Full property address"
    )

    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)

    bathrooms: Mapped[float] = mapped_column(
        Numeric(3, 1, asdecimal=False),
        nullable=False,
        comment="Number of bathrooms, halves allowed"
    )

    sqft: Mapped[int] = mapped_column(Integer, nullable=False)

    rent: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Monthly rent in dollars; null when not published"
    )

    available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True
    )

    location_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="ID of the location this property belongs to"
    )

    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    features: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Comma-separated list of amenities"
    )

    property_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="multi-family",
        comment="Property type tag such as house or multi-family"
    )

    is_multifamily: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False
    )

    unit_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, name={self.name}, location_id={self.location_id})>"


class PropertyUnit(Base):
    """
    Individual unit of a multifamily property.
    """

    __tablename__ = "property_units"

    property_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="ID of the property this unit belongs to"
    )

    unit_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Unit label such as 101 or B"
    )

    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[float] = mapped_column(Numeric(3, 1, asdecimal=False), nullable=False)
    sqft: Mapped[int] = mapped_column(Integer, nullable=False)
    rent: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    features: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation of the unit."""
        return f"<PropertyUnit(id={self.id}, property_id={self.property_id}, unit_number={self.unit_number})>"


Index("idx_property_location_available", Property.location_id, Property.available)
Index("idx_unit_property_number", PropertyUnit.property_id, PropertyUnit.unit_number)
