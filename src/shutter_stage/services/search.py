"""Keyword lookups for tags and the camera/lens values stored in file metadata."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from shutter_stage.models import File, Tag

logger = logging.getLogger(__name__)

__all__ = ["SEARCH_RESULT_LIMIT", "SearchService"]

SEARCH_RESULT_LIMIT = 20


def _contains_pattern(keyword: str) -> str:
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SearchService:
    """Read-only lookups feeding the tag, camera and lens listing filters."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def tags(self, name: str) -> list[Tag]:
        """Return tags whose name contains the keyword, ignoring case."""
        result = self.session.execute(
            select(Tag)
            .where(Tag.name.ilike(_contains_pattern(name), escape="\\"))
            .order_by(Tag.id)
            .limit(SEARCH_RESULT_LIMIT)
        )
        return list(result.scalars())

    def cameras(self, make_model: str) -> list[tuple[str, str]]:
        """Return distinct ``(Make, Model)`` pairs matching ``"<make> <model>"``."""
        return self._equipment("Make", "Model", make_model)

    def lenses(self, make_model: str) -> list[tuple[str, str]]:
        """Return distinct ``(LensMake, LensModel)`` pairs matching the keyword."""
        return self._equipment("LensMake", "LensModel", make_model)

    def _equipment(self, make_key: str, model_key: str, keyword: str) -> list[tuple[str, str]]:
        make = File.exif[make_key].as_string()
        model = File.exif[model_key].as_string()
        rows = self.session.execute(
            select(make.label("make"), model.label("model"))
            .where(
                make.is_not(None),
                model.is_not(None),
                (make + " " + model).ilike(_contains_pattern(keyword), escape="\\"),
            )
            .distinct()
            .order_by(make, model)
            .limit(SEARCH_RESULT_LIMIT)
        ).all()
        logger.debug("Search %s/%s %r matched %d values", make_key, model_key, keyword, len(rows))
        return [(row.make, row.model) for row in rows]
