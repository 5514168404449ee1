"""
Inquiry repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.models.inquiry import Inquiry
from app.repositories.base import BaseRepository
from typing import List


class InquiryRepository(BaseRepository[Inquiry]):
    """Repository for contact-form inquiries."""

    def __init__(self, db: AsyncSession):
        super().__init__(Inquiry, db)

    async def get_newest_first(self) -> List[Inquiry]:
        """All inquiries, most recent first; id breaks timestamp ties."""
        return await self.get_multi(order_by=("-created_at", "-id"))
