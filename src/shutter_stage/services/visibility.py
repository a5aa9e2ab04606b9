"""Access rules for viewing and changing a single post."""
from __future__ import annotations

import logging

from shutter_stage.core.errors import AccessDeniedError
from shutter_stage.models import AuditLog, AuditLogStatus, PostStatus
from shutter_stage.services.identity import Principal

logger = logging.getLogger(__name__)


def can_view_post(
    *,
    post_id: int,
    owner_id: int,
    status: str,
    latest_audit: AuditLog | None,
    principal: Principal,
) -> bool:
    """Decide whether a principal may view a post.

    Args:
        post_id: Identifier of the post, used for logging only.
        owner_id: Identifier of the owning user.
        status: Publication state of the post.
        latest_audit: Most recent audit record for the post, if any. Older
            records are irrelevant even when one of them was approved.
        principal: The requesting caller.

    Returns:
        True for administrators, for the owner, and for anyone when the post is
        published and its latest verdict is approved.
    """
    if principal.is_admin:
        return True
    if principal.id is not None and principal.id == owner_id:
        return True
    is_published = status == PostStatus.PUBLISHED.value
    is_approved = (
        latest_audit is not None and latest_audit.status == AuditLogStatus.APPROVED.value
    )
    allowed = is_published and is_approved
    if not allowed:
        logger.info("Denied view of post %s to principal %s", post_id, principal.id)
    return allowed


def ensure_can_view_post(
    *,
    post_id: int,
    owner_id: int,
    status: str,
    latest_audit: AuditLog | None,
    principal: Principal,
) -> None:
    """Raise `AccessDeniedError` unless `can_view_post` allows access."""
    if not can_view_post(
        post_id=post_id,
        owner_id=owner_id,
        status=status,
        latest_audit=latest_audit,
        principal=principal,
    ):
        raise AccessDeniedError()


def ensure_can_modify_post(*, owner_id: int, principal: Principal) -> None:
    """Only the owner or an administrator may change or delete a post."""
    if principal.is_admin:
        return
    if principal.id is None or principal.id != owner_id:
        raise AccessDeniedError("You can only modify your own posts")
