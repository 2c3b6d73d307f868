import uuid
from enum import Enum

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONList, TimestampMixin


class ReportReason(Enum):
    SPAM = "Spam or misleading"
    SCAM = "Scam / Malware / Phishing"
    BROKEN = "Broken link or not working"
    INAPPROPRIATE = "Inappropriate content"
    DUPLICATE = "Duplicate listing"


class Report(Base, TimestampMixin):
    """A user-filed complaint against an app. Reports are never mutated."""

    __tablename__ = "reports"

    app_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(as_uuid=True), sa.ForeignKey("apps.id", ondelete="CASCADE"), nullable=False, index=True
    )
    app_name: Mapped[str] = mapped_column(sa.String(255), nullable=False, comment="Snapshot at report time")
    reasons: Mapped[list[str]] = mapped_column(JSONList, nullable=False)
    timestamp: Mapped[int] = mapped_column(sa.BigInteger(), nullable=False, comment="Epoch milliseconds")

    def __repr__(self) -> str:
        return f"<Report(app_name='{self.app_name}', reasons={self.reasons})>"
