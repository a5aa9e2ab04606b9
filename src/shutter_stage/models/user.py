"""SQLAlchemy model for user accounts."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shutter_stage.db.session import Base


class User(Base):
    """Account that owns posts and files.

    Credential storage lives with the identity collaborator; this table only
    carries what listing and visibility need.
    """

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    # Explicit role flag; administrator rights are never inferred from the id.
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
