# src/shutter_stage/services/__init__.py
"""Business logic services for the Shutter Stage application."""

from .audit_log import AuditLogService
from .identity import ANONYMOUS_PRINCIPAL, Principal
from .post_service import PostService
from .search import SearchService

__all__ = [
    "ANONYMOUS_PRINCIPAL",
    "AuditLogService",
    "PostService",
    "Principal",
    "SearchService",
]
