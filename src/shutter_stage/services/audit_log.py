"""Audit log persistence used by moderation and visibility checks."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from shutter_stage.core.errors import AuditLogNotFoundError
from shutter_stage.models import AuditLog, AuditLogStatus

logger = logging.getLogger(__name__)

__all__ = ["AuditLogService"]


class AuditLogService:
    """Thin wrapper around database access for audit records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        resource_type: str,
        resource_id: int,
        status: AuditLogStatus,
        user_id: int | None,
        note: str | None = None,
    ) -> AuditLog:
        """Record a new verdict. Existing records are left untouched."""
        audit_log = AuditLog(
            resource_type=resource_type,
            resource_id=resource_id,
            status=status.value,
            user_id=user_id,
            note=note,
        )
        self.session.add(audit_log)
        self.session.commit()
        self.session.refresh(audit_log)
        logger.info(
            "Audit %s recorded for %s %s: %s",
            audit_log.id,
            resource_type,
            resource_id,
            audit_log.status,
        )
        return audit_log

    def list_by_resource(self, resource_type: str, resource_id: int) -> list[AuditLog]:
        """Return every record for a resource, newest first."""
        result = self.session.execute(
            select(AuditLog)
            .where(
                AuditLog.resource_type == resource_type,
                AuditLog.resource_id == resource_id,
            )
            .order_by(AuditLog.id.desc())
        )
        return list(result.scalars())

    def most_recent(self, resource_type: str, resource_id: int) -> AuditLog | None:
        """Return the authoritative (newest) record for a resource."""
        result = self.session.execute(
            select(AuditLog)
            .where(
                AuditLog.resource_type == resource_type,
                AuditLog.resource_id == resource_id,
            )
            .order_by(AuditLog.id.desc())
            .limit(1)
        )
        return result.scalars().first()

    def delete(self, audit_log_id: int) -> None:
        audit_log = self.session.get(AuditLog, audit_log_id)
        if audit_log is None:
            raise AuditLogNotFoundError()
        self.session.delete(audit_log)
        self.session.commit()
        logger.info("Audit %s deleted", audit_log_id)

    def delete_for_resource(self, resource_type: str, resource_id: int) -> None:
        """Remove all records of a resource without committing."""
        self.session.execute(
            delete(AuditLog).where(
                AuditLog.resource_type == resource_type,
                AuditLog.resource_id == resource_id,
            )
        )
