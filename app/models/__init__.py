"""
Database models for the Rental Listings API.
Includes catalog, listing, gallery image and inquiry models.
"""

from app.models.location import Location, Neighborhood, Feature
from app.models.property import Property, PropertyUnit
from app.models.image import PropertyImage, UnitImage, ImageStorage
from app.models.inquiry import Inquiry, InquiryStatus

# Export all models for easy importing
__all__ = [
    "Location",
    "Neighborhood",
    "Feature",
    "Property",
    "PropertyUnit",
    "PropertyImage",
    "UnitImage",
    "ImageStorage",
    "Inquiry",
    "InquiryStatus",
]
