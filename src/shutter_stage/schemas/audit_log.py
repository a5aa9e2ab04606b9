"""Audit log Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shutter_stage.models.audit_log import RESOURCE_TYPE_POST, AuditLogStatus


class AuditLogCreate(BaseModel):
    """Schema for recording a moderation verdict."""

    resource_type: str = Field(RESOURCE_TYPE_POST, alias="resourceType", max_length=32)
    resource_id: int = Field(..., alias="resourceId")
    status: AuditLogStatus
    note: str | None = Field(None, max_length=2000)

    model_config = ConfigDict(populate_by_name=True)


class AuditLogResponse(BaseModel):
    """Schema for audit records returned by the API."""

    id: int
    resource_type: str = Field(serialization_alias="resourceType")
    resource_id: int = Field(serialization_alias="resourceId")
    status: str
    note: str | None = None
    user_id: int | None = Field(None, serialization_alias="userId")
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)
