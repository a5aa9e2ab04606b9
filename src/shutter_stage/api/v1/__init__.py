# src/shutter_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import audit_logs_router, posts_router, search_router

__all__ = [
    "audit_logs_router",
    "posts_router",
    "search_router",
]
