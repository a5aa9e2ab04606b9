# src/shutter_stage/models/__init__.py
"""SQLAlchemy models for the Shutter Stage application."""

from .audit_log import AuditLog, AuditLogStatus
from .comment import Comment
from .file import File
from .like import UserLikePost
from .post import Post, PostStatus
from .tag import PostTag, Tag
from .user import User

__all__ = [
    "AuditLog", "AuditLogStatus",
    "Comment",
    "File",
    "UserLikePost",
    "Post", "PostStatus",
    "PostTag", "Tag",
    "User",
]
