# src/shutter_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .audit_logs import router as audit_logs_router
from .posts import router as posts_router
from .search import router as search_router

__all__ = [
    "audit_logs_router",
    "posts_router",
    "search_router",
]
