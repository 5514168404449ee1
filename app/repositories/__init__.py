"""
Repository layer for data access operations.
Provides async SQLAlchemy repositories used by the relational storage backend.
"""

from app.repositories.base import BaseRepository
from app.repositories.catalog import LocationRepository, NeighborhoodRepository, FeatureRepository
from app.repositories.property import PropertyRepository, PropertyUnitRepository
from app.repositories.image import (
    PropertyImageRepository,
    UnitImageRepository,
    ImageStorageRepository,
)
from app.repositories.inquiry import InquiryRepository

__all__ = [
    "BaseRepository",
    "LocationRepository",
    "NeighborhoodRepository",
    "FeatureRepository",
    "PropertyRepository",
    "PropertyUnitRepository",
    "PropertyImageRepository",
    "UnitImageRepository",
    "ImageStorageRepository",
    "InquiryRepository",
]
