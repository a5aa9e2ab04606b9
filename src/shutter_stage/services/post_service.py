"""Service-level helpers for creating and changing posts."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shutter_stage.core.errors import DuplicatePostTagError, PostNotFoundError, TagNotFoundError
from shutter_stage.models import Post, PostStatus, PostTag, Tag
from shutter_stage.models.audit_log import RESOURCE_TYPE_POST
from shutter_stage.services.audit_log import AuditLogService

logger = logging.getLogger(__name__)

__all__ = ["PostService"]


class PostService:
    """Write-side operations on posts and their tags."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, post_id: int) -> Post:
        """Return a post by identifier.

        Raises:
            PostNotFoundError: If the post does not exist.
        """
        post = self.session.get(Post, post_id)
        if post is None:
            raise PostNotFoundError()
        return post

    def create(
        self,
        *,
        user_id: int,
        title: str,
        content: str | None,
        status: PostStatus = PostStatus.DRAFT,
    ) -> Post:
        post = Post(user_id=user_id, title=title, content=content, status=status.value)
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        logger.info("Post %s created by user %s", post.id, user_id)
        return post

    def update(
        self,
        post: Post,
        *,
        title: str | None = None,
        content: str | None = None,
        status: PostStatus | None = None,
    ) -> Post:
        """Apply the supplied fields; ``None`` leaves a field unchanged."""
        if title is not None:
            post.title = title
        if content is not None:
            post.content = content
        if status is not None:
            post.status = status.value
        self.session.commit()
        self.session.refresh(post)
        return post

    def delete(self, post: Post) -> None:
        """Delete a post along with its files, tag links, comments, likes and audits."""
        post_id = post.id
        self.session.delete(post)
        AuditLogService(self.session).delete_for_resource(RESOURCE_TYPE_POST, post_id)
        self.session.commit()
        logger.info("Post %s deleted", post_id)

    def _get_tag_by_name(self, name: str) -> Tag | None:
        result = self.session.execute(select(Tag).where(Tag.name == name))
        return result.scalars().first()

    def _post_has_tag(self, post_id: int, tag_id: int) -> bool:
        return self.session.get(PostTag, (post_id, tag_id)) is not None

    def _get_or_create_tag(self, name: str) -> Tag:
        tag = self._get_tag_by_name(name)
        if tag is not None:
            return tag
        try:
            with self.session.begin_nested():
                tag = Tag(name=name)
                self.session.add(tag)
        except IntegrityError:
            # Another request created the same tag first.
            tag = self._get_tag_by_name(name)
            if tag is None:
                raise
        return tag

    def attach_tag(self, post: Post, name: str) -> Tag:
        """Tag a post by name, creating the tag when needed.

        Raises:
            DuplicatePostTagError: If the post already carries the tag.
        """
        tag = self._get_or_create_tag(name)
        if self._post_has_tag(post.id, tag.id):
            raise DuplicatePostTagError()
        try:
            with self.session.begin_nested():
                self.session.add(PostTag(post_id=post.id, tag_id=tag.id))
        except IntegrityError as exc:
            raise DuplicatePostTagError() from exc
        self.session.commit()
        return tag

    def detach_tag(self, post: Post, tag_id: int) -> None:
        """Remove a tag from a post.

        Raises:
            TagNotFoundError: If the post does not carry the tag.
        """
        result = self.session.execute(
            delete(PostTag).where(PostTag.post_id == post.id, PostTag.tag_id == tag_id)
        )
        if result.rowcount == 0:
            raise TagNotFoundError()
        self.session.commit()
