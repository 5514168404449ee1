"""
Utility modules for the Rental Listings API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    ConflictError,
    BadRequestError,
    InternalServerError,
    ImageNotFoundError,
    StorageError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "InternalServerError",
    "ImageNotFoundError",
    "StorageError",
]
