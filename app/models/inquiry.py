"""
Inquiry model for contact-form submissions.
"""

from sqlalchemy import String, Text, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from typing import Optional
from datetime import datetime
import enum


class InquiryStatus(str, enum.Enum):
    """Workflow status of an inquiry."""
    NEW = "new"
    CONTACTED = "contacted"
    RESOLVED = "resolved"


class Inquiry(Base):
    """
    Inquiry submitted from the public site.
    The property name is captured at submission time.
    """

    __tablename__ = "inquiries"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    property_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    property_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Snapshot of the property name when the inquiry was made"
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=InquiryStatus.NEW.value,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        """String representation of the inquiry."""
        return f"<Inquiry(id={self.id}, email={self.email}, status={self.status})>"
