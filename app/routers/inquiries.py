"""
Inquiry API endpoints for the contact form and inquiry triage.
"""

from fastapi import APIRouter, Depends, Path, status
from typing import List

from app.schemas.error import get_error_responses
from app.schemas.inquiry import InquiryCreate, InquiryStatusUpdate, InquiryResponse
from app.services.inquiry import InquiryService
from app.utils.dependencies import get_inquiry_service


router = APIRouter(prefix="/inquiries", tags=["Inquiries"])


@router.get(
    "",
    response_model=List[InquiryResponse],
    summary="List inquiries",
    description="Every inquiry, newest first."
)
async def list_inquiries(
    inquiry_service: InquiryService = Depends(get_inquiry_service)
):
    return await inquiry_service.list_inquiries()


@router.post(
    "",
    response_model=InquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit inquiry",
    responses=get_error_responses(400, 404)
)
async def create_inquiry(
    inquiry_data: InquiryCreate,
    inquiry_service: InquiryService = Depends(get_inquiry_service)
):
    """
    Submit a contact-form inquiry.

    The status defaults to new. When a property is referenced without a
    name, the property's name is recorded with the inquiry.
    """
    return await inquiry_service.create_inquiry(inquiry_data)


@router.patch(
    "/{inquiry_id}/status",
    response_model=InquiryResponse,
    summary="Update inquiry status",
    description="Move an inquiry to new, contacted or resolved.",
    responses=get_error_responses(400, 404)
)
async def update_inquiry_status(
    status_data: InquiryStatusUpdate,
    inquiry_id: int = Path(..., description="Inquiry ID"),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
):
    return await inquiry_service.update_status(inquiry_id, status_data.status)
