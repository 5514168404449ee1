"""
Pydantic schemas for contact-form inquiries.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from app.models.inquiry import InquiryStatus
from app.schemas.common import CamelModel


class InquiryCreate(CamelModel):
    """Schema for submitting an inquiry."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Sarah Davis"])

    email: EmailStr = Field(..., examples=["sarah.davis@example.com"])

    phone: Optional[str] = Field(None, max_length=50, examples=["404-555-8765"])

    message: str = Field(..., min_length=1, max_length=5000)

    property_id: Optional[int] = Field(None, gt=0, description="Property the inquiry is about")

    property_name: Optional[str] = Field(
        None,
        max_length=255,
        description="Property name; filled from the property when omitted"
    )

    status: InquiryStatus = Field(InquiryStatus.NEW, description="Initial workflow status")

    @field_validator("name", "message")
    @classmethod
    def validate_not_blank(cls, v):
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()


class InquiryStatusUpdate(CamelModel):
    """Schema for moving an inquiry through its workflow."""

    status: InquiryStatus = Field(..., description="One of new, contacted, resolved")


class InquiryResponse(CamelModel):
    """Schema for inquiry responses."""

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    property_id: Optional[int] = None
    property_name: Optional[str] = None
    status: InquiryStatus
    created_at: Optional[datetime] = None
