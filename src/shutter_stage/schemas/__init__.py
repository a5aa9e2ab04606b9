# src/shutter_stage/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .audit_log import AuditLogCreate, AuditLogResponse
from .post import (
    PostCreate,
    PostResponse,
    PostTagCreate,
    PostTagDelete,
    PostTagResponse,
    PostUpdate,
)
from .search import EquipmentResponse

__all__ = [
    "AuditLogCreate", "AuditLogResponse", "EquipmentResponse",
    "PostCreate", "PostResponse", "PostTagCreate", "PostTagDelete",
    "PostTagResponse", "PostUpdate",
]
