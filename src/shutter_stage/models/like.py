"""Models capturing likes on posts."""

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from shutter_stage.db.session import Base


class UserLikePost(Base):
    """Per-user like on a post."""

    __tablename__ = "user_like_post"
    __table_args__ = (
        Index("ix_user_like_post_post_id", "post_id"),
    )

    # Composite primary key prevents duplicate likes from the same user.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
