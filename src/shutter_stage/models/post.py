"""SQLAlchemy models for posts and their publication state."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shutter_stage.db.session import Base
from shutter_stage.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .file import File
    from .like import UserLikePost
    from .tag import Tag
    from .user import User


class PostStatus(StrEnum):
    """Publication lifecycle of a post."""

    PUBLISHED = "published"
    DRAFT = "draft"
    ARCHIVED = "archived"


class Post(Base):
    """Publishable unit owned exclusively by its creating user."""

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=PostStatus.DRAFT.value,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user: Mapped[User] = relationship("User")
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary="post_tag",
        order_by="Tag.id",
    )
    # Deleting a post removes what it owns; audit records are cleaned up by the service.
    files: Mapped[list[File]] = relationship(
        "File",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="File.id",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        cascade="all, delete-orphan",
    )
    likes: Mapped[list[UserLikePost]] = relationship(
        "UserLikePost",
        cascade="all, delete-orphan",
    )
