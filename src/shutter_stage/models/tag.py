"""SQLAlchemy models for tags and the post/tag association."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shutter_stage.db.session import Base


class Tag(Base):
    """Free-form label attached to posts."""

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Unique so concurrent attach requests cannot create duplicate tags.
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)


class PostTag(Base):
    """Join table mapping tags onto posts."""

    __tablename__ = "post_tag"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
    )
