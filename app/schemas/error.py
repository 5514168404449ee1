"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["status"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Input should be 'new', 'contacted' or 'resolved'"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["enum"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error",
        examples=["archived"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])

    message: str = Field(..., description="Human-readable error message", examples=["Request validation failed"])

    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2024-01-01T00:00:00Z"])

    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking", examples=["abc12345"])

    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _error_example(description: str, code: str, message: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": code,
                        "message": message,
                        "timestamp": "2024-01-01T00:00:00Z",
                        "request_id": "abc12345"
                    }
                }
            }
        }
    }


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    400: _error_example("Bad Request - Invalid request body or parameters", "VALIDATION_ERROR", "Request validation failed"),
    404: _error_example("Not Found - Referenced entity does not exist", "NOT_FOUND", "Property not found with ID: 42"),
    409: _error_example("Conflict - Resource already exists", "CONFLICT", "Neighborhood already exists for this location"),
    500: _error_example("Internal Server Error", "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Error response documentation for the given status codes.

    Args:
        status_codes: HTTP status codes the endpoint can return

    Returns:
        Mapping suitable for the responses argument of a route decorator
    """
    return {code: COMMON_ERROR_RESPONSES[code] for code in status_codes if code in COMMON_ERROR_RESPONSES}
