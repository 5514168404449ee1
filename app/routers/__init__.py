"""
API route handlers for the Rental Listings API.
Provides organized routing for different API endpoints.
"""

from .locations import router as locations_router
from .features import router as features_router
from .properties import router as properties_router
from .units import router as units_router
from .images import (
    property_images_router,
    unit_images_router,
    object_images_router,
    db_images_router,
)
from .inquiries import router as inquiries_router

__all__ = [
    "locations_router",
    "features_router",
    "properties_router",
    "units_router",
    "property_images_router",
    "unit_images_router",
    "object_images_router",
    "db_images_router",
    "inquiries_router",
]
