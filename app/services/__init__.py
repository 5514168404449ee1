"""
Service layer for business logic implementation.
Contains services for the catalog, listings, images, inquiries and error handling.
"""

from .catalog import CatalogService
from .image import ImageService
from .inquiry import InquiryService
from .property import PropertyService
from .error_handler import ErrorHandlerService

__all__ = [
    "CatalogService",
    "ImageService",
    "InquiryService",
    "PropertyService",
    "ErrorHandlerService"
]
