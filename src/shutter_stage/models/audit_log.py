"""Models tracking moderation verdicts on resources."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shutter_stage.db.session import Base
from shutter_stage.db.time import utcnow

RESOURCE_TYPE_POST = "post"


class AuditLogStatus(StrEnum):
    """Verdict recorded by a moderator."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class AuditLog(Base):
    """Moderation verdict for a resource.

    Records are never updated. A newer record supersedes older ones, so only the
    highest id per resource is authoritative.
    """

    __tablename__ = "audit_log"
    __table_args__ = (
        Index("ix_audit_log_resource", "resource_type", "resource_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Weak reference: no foreign key, the resource may be of any type.
    resource_type: Mapped[str] = mapped_column(String(32), nullable=False)
    resource_id: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
