"""SQLAlchemy model for uploaded files attached to posts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shutter_stage.db.session import Base

if TYPE_CHECKING:
    from .post import Post


class File(Base):
    """Image file belonging to a post.

    Upload handling and EXIF extraction happen elsewhere; the extracted tags are
    stored verbatim in ``metadata`` (``Make``, ``Model``, ``LensMake``, ...).
    """

    __tablename__ = "file"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mimetype: Mapped[str] = mapped_column(String(64), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # "metadata" is reserved on declarative classes, hence the attribute name.
    exif: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON, nullable=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("user.id"), nullable=False)

    post: Mapped[Post] = relationship("Post", back_populates="files")
