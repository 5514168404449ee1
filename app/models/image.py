"""
Image models for property and unit galleries plus database-resident blobs.
Gallery rows carry either a legacy external URL or an object storage key.
"""

from sqlalchemy import String, Text, Integer, Boolean, LargeBinary, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from typing import Optional
from datetime import datetime


class GalleryImageMixin:
    """
    Columns shared by property and unit gallery images.
    At most one image per parent has is_featured set; writers clear siblings first.
    """

    url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Legacy or external image URL"
    )

    object_key: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        index=True,
        comment="Object storage key for blob-stored images"
    )

    alt: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Sort position within the gallery"
    )

    is_featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether this is the featured image of its parent"
    )

    mime_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="Size in bytes")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    @property
    def image_ref(self) -> Optional[str]:
        """The stored reference used to locate the image bytes."""
        return self.object_key or self.url


class PropertyImage(GalleryImageMixin, Base):
    """Gallery image belonging to a property."""

    __tablename__ = "property_images"

    property_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    def __repr__(self) -> str:
        """String representation of the property image."""
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, featured={self.is_featured})>"


class UnitImage(GalleryImageMixin, Base):
    """Gallery image belonging to a property unit."""

    __tablename__ = "unit_images"

    unit_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="ID of the unit this image belongs to"
    )

    def __repr__(self) -> str:
        """String representation of the unit image."""
        return f"<UnitImage(id={self.id}, unit_id={self.unit_id}, featured={self.is_featured})>"


class ImageStorage(Base):
    """
    Database-resident copy of image bytes keyed by object key.
    Used when the object store runs on the relational backend.
    """

    __tablename__ = "image_storage"

    object_key: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        unique=True,
        index=True
    )

    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation of the stored image."""
        return f"<ImageStorage(id={self.id}, object_key={self.object_key}, size={self.size})>"


Index("idx_property_image_order", PropertyImage.property_id, PropertyImage.display_order)
Index("idx_unit_image_order", UnitImage.unit_id, UnitImage.display_order)
