"""Audit log endpoints for the Shutter Stage API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from shutter_stage.api.v1.dependencies import AuthenticatedPrincipalDep, SessionDep
from shutter_stage.core.errors import AccessDeniedError
from shutter_stage.models import AuditLog
from shutter_stage.models.audit_log import RESOURCE_TYPE_POST
from shutter_stage.schemas.audit_log import AuditLogCreate, AuditLogResponse
from shutter_stage.services.audit_log import AuditLogService
from shutter_stage.services.identity import Principal
from shutter_stage.services.post_service import PostService

router = APIRouter(prefix="/audit-logs", tags=["audit-logs"])


def _require_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise AccessDeniedError("Only administrators can moderate content")


@router.post("/", response_model=AuditLogResponse, status_code=status.HTTP_201_CREATED)
async def create_audit_log(
    audit_data: AuditLogCreate,
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
) -> AuditLog:
    """Record a moderation verdict. A newer verdict supersedes older ones."""
    _require_admin(principal)
    if audit_data.resource_type == RESOURCE_TYPE_POST:
        PostService(db).get(audit_data.resource_id)
    return AuditLogService(db).create(
        resource_type=audit_data.resource_type,
        resource_id=audit_data.resource_id,
        status=audit_data.status,
        user_id=principal.id,
        note=audit_data.note,
    )


@router.get("/", response_model=list[AuditLogResponse])
async def list_audit_logs(
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
    resource_id: int = Query(..., alias="resourceId"),
    resource_type: str = Query(RESOURCE_TYPE_POST, alias="resourceType"),
) -> list[AuditLog]:
    """List verdicts for a resource, newest first.

    Visible to administrators and to the owner of the post.
    """
    if not principal.is_admin:
        if resource_type != RESOURCE_TYPE_POST:
            raise AccessDeniedError()
        post = PostService(db).get(resource_id)
        if post.user_id != principal.id:
            raise AccessDeniedError()
    return AuditLogService(db).list_by_resource(resource_type, resource_id)


@router.delete("/{audit_log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_audit_log(
    audit_log_id: int,
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
) -> None:
    """Delete a single verdict."""
    _require_admin(principal)
    AuditLogService(db).delete(audit_log_id)
