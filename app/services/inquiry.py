"""
Inquiry service for contact-form submissions and their workflow status.
"""

from typing import List
import logging

from app.models.inquiry import Inquiry, InquiryStatus
from app.schemas.inquiry import InquiryCreate
from app.storage.base import Storage
from app.utils.exceptions import NotFoundError, PropertyNotFoundError

logger = logging.getLogger(__name__)


class InquiryService:
    """
    Service for inquiry submission and triage.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_inquiries(self) -> List[Inquiry]:
        """All inquiries, newest first."""
        return await self.storage.get_inquiries()

    async def create_inquiry(self, inquiry_data: InquiryCreate) -> Inquiry:
        """
        Record an inquiry.

        When a property is referenced without a name, the property's
        current name is copied onto the inquiry.

        Args:
            inquiry_data: Inquiry submission

        Returns:
            Created inquiry

        Raises:
            PropertyNotFoundError: If the referenced property doesn't exist
        """
        create_data = inquiry_data.model_dump(mode="json")

        if inquiry_data.property_id is not None:
            property_obj = await self.storage.get_property(inquiry_data.property_id)
            if property_obj is None:
                raise PropertyNotFoundError(inquiry_data.property_id)
            if not create_data.get("property_name"):
                create_data["property_name"] = property_obj.name

        inquiry = await self.storage.create_inquiry(create_data)
        logger.info(f"Inquiry received: {inquiry.id} (property: {inquiry.property_id})")
        return inquiry

    async def update_status(self, inquiry_id: int, status: InquiryStatus) -> Inquiry:
        """
        Move an inquiry to a new status.

        Raises:
            NotFoundError: If the inquiry doesn't exist
        """
        inquiry = await self.storage.update_inquiry_status(inquiry_id, InquiryStatus(status).value)
        if inquiry is None:
            raise NotFoundError("Inquiry", inquiry_id)

        logger.info(f"Inquiry {inquiry_id} marked {inquiry.status}")
        return inquiry
