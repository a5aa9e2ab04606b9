"""Listing query composition for posts.

Client query parameters pass through four request-scoped derivations before any
SQL is built:

* ``select_filter`` picks exactly one ``PostFilter`` variant.
* ``select_sort`` picks one of the fixed ``SortKey`` orderings.
* ``paginate`` turns a page number into a ``Pagination`` window.
* ``elevate_mode`` applies manage/admin mode on top of the chosen filter.

``build_listing_context`` runs all four and freezes the result into a
``ListingContext``; ``list_posts`` consumes it once and returns the page of rows
together with the total count computed under the same predicates.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from sqlalchemy import (
    ColumnElement,
    Select,
    and_,
    distinct,
    false,
    func,
    literal,
    select,
    true,
)
from sqlalchemy.orm import Session, aliased, join
from sqlalchemy.sql.selectable import Subquery

from shutter_stage.core.errors import (
    InvalidPostStatusError,
    PostNotFoundError,
)
from shutter_stage.core.settings import DEFAULT_POSTS_PER_PAGE
from shutter_stage.models import (
    AuditLog,
    AuditLogStatus,
    Comment,
    File,
    Post,
    PostStatus,
    PostTag,
    Tag,
    User,
    UserLikePost,
)
from shutter_stage.models.audit_log import RESOURCE_TYPE_POST
from shutter_stage.schemas.post import (
    PostAuditSummary,
    PostFileSummary,
    PostOwner,
    PostResponse,
    PostTagResponse,
)
from shutter_stage.services.identity import Principal

logger = logging.getLogger(__name__)

__all__ = [
    "AdminManageFilter",
    "CameraFilter",
    "DefaultFilter",
    "LensFilter",
    "ListingContext",
    "OwnedByFilter",
    "Pagination",
    "PostFilter",
    "PostListing",
    "SortKey",
    "TagNameFilter",
    "UserLikedFilter",
    "UserPublishedFilter",
    "build_listing_context",
    "count_posts",
    "elevate_mode",
    "get_post_detail",
    "list_posts",
    "paginate",
    "parse_audit_status",
    "parse_post_status",
    "select_filter",
    "select_sort",
]


# ---------------------------------------------------------------------------
# Filter variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DefaultFilter:
    name: ClassVar[str] = "default"


@dataclass(frozen=True)
class TagNameFilter:
    name: ClassVar[str] = "tagName"
    tag_name: str


@dataclass(frozen=True)
class UserPublishedFilter:
    name: ClassVar[str] = "userPublished"
    # None when the client sent a user that is not an id; nothing matches.
    user_id: int | None


@dataclass(frozen=True)
class UserLikedFilter:
    name: ClassVar[str] = "userLiked"
    user_id: int | None


@dataclass(frozen=True)
class CameraFilter:
    name: ClassVar[str] = "camera"
    make: str
    model: str


@dataclass(frozen=True)
class LensFilter:
    name: ClassVar[str] = "lens"
    make: str
    model: str


@dataclass(frozen=True)
class AdminManageFilter:
    """Manage mode for an administrator: every owner, every state."""

    name: ClassVar[str] = "adminManagePosts"


@dataclass(frozen=True)
class OwnedByFilter:
    """Manage mode for everyone else: only the caller's own posts."""

    name: ClassVar[str] = "ownedPosts"
    user_id: int | None


PostFilter = (
    DefaultFilter
    | TagNameFilter
    | UserPublishedFilter
    | UserLikedFilter
    | CameraFilter
    | LensFilter
    | AdminManageFilter
    | OwnedByFilter
)


def _param(params: Mapping[str, str | None], key: str) -> str | None:
    value = params.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_user_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def select_filter(params: Mapping[str, str | None]) -> PostFilter:
    """Map raw query parameters onto exactly one filter variant.

    Variants are tried in priority order and the first full match wins. Camera
    parameters take precedence over lens parameters when both pairs are given.
    Anything unmatched falls through to ``DefaultFilter``. Selection never
    fails: a ``user`` that is not a number keeps its variant but matches no post.
    """
    tag = _param(params, "tag")
    user = _param(params, "user")
    action = _param(params, "action")

    if tag and not user and not action:
        return TagNameFilter(tag_name=tag)
    if user and action == "published" and not tag:
        return UserPublishedFilter(user_id=_parse_user_id(user))
    if user and action == "liked" and not tag:
        return UserLikedFilter(user_id=_parse_user_id(user))

    camera_make = _param(params, "cameraMake")
    camera_model = _param(params, "cameraModel")
    if camera_make and camera_model:
        return CameraFilter(make=camera_make, model=camera_model)

    lens_make = _param(params, "lensMake")
    lens_model = _param(params, "lensModel")
    if lens_make and lens_model:
        return LensFilter(make=lens_make, model=lens_model)

    return DefaultFilter()


# ---------------------------------------------------------------------------
# Sort, pagination, states
# ---------------------------------------------------------------------------


class SortKey(StrEnum):
    EARLIEST = "earliest"
    LATEST = "latest"
    MOST_COMMENTS = "most_comments"


def select_sort(key: str | None) -> SortKey:
    """Return the requested ordering, defaulting to ``latest``."""
    try:
        return SortKey(key)
    except ValueError:
        return SortKey.LATEST


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int


def _coerce_page(page: object) -> int:
    if page is None:
        return 1
    try:
        number = int(str(page).strip())
    except ValueError:
        return 1
    return max(number, 1)


def paginate(page: object, items_per_page: int | None) -> Pagination:
    """Compute a limit/offset window.

    Args:
        page: Raw page value; absent, non-numeric and values below 1 mean page 1.
        items_per_page: Configured page size; falsy or negative means the default.

    Returns:
        Pagination with ``offset = limit * (page - 1)``.
    """
    limit = items_per_page if items_per_page and items_per_page > 0 else DEFAULT_POSTS_PER_PAGE
    return Pagination(limit=limit, offset=limit * (_coerce_page(page) - 1))


def parse_post_status(value: str | None) -> PostStatus | None:
    """Validate a client-supplied publication state; empty means no restriction."""
    if not value:
        return None
    try:
        return PostStatus(value)
    except ValueError as exc:
        raise InvalidPostStatusError() from exc


def parse_audit_status(value: str | None) -> AuditLogStatus | str | None:
    """Read a client-supplied audit verdict; empty means no restriction.

    Unknown verdicts are kept as plain strings. They are bound like any other
    value and simply match no audit record.
    """
    if not value:
        return None
    try:
        return AuditLogStatus(value)
    except ValueError:
        return value


def elevate_mode(
    post_filter: PostFilter,
    status: PostStatus | None,
    *,
    manage: bool,
    admin: bool,
    principal: Principal,
) -> tuple[PostFilter, PostStatus | None]:
    """Apply manage/admin mode to the selected filter and state.

    Outside manage mode only published posts are listed, whatever state was
    requested. In manage mode the filter is replaced: administrators asking for
    admin mode see everything, everyone else sees only their own posts.
    """
    if not manage:
        return post_filter, PostStatus.PUBLISHED
    if admin and principal.is_admin:
        return AdminManageFilter(), status
    return OwnedByFilter(user_id=principal.id), status


@dataclass(frozen=True)
class ListingContext:
    """Everything the listing query needs, derived once per request."""

    post_filter: PostFilter
    sort: SortKey
    pagination: Pagination
    status: PostStatus | None
    audit_status: AuditLogStatus | str | None
    principal: Principal


def build_listing_context(
    params: Mapping[str, str | None],
    principal: Principal,
    *,
    items_per_page: int | None,
) -> ListingContext:
    """Run every request-scoped derivation over the raw query parameters."""
    status = parse_post_status(_param(params, "status"))
    audit_status = parse_audit_status(_param(params, "auditStatus"))
    post_filter, status = elevate_mode(
        select_filter(params),
        status,
        manage=params.get("manage") == "true",
        admin=params.get("admin") == "true",
        principal=principal,
    )
    return ListingContext(
        post_filter=post_filter,
        sort=select_sort(params.get("sort")),
        pagination=paginate(params.get("page"), items_per_page),
        status=status,
        audit_status=audit_status,
        principal=principal,
    )


# ---------------------------------------------------------------------------
# Statement composition
# ---------------------------------------------------------------------------

primary_file = aliased(File, name="primary_file")
latest_audit = aliased(AuditLog, name="latest_audit")


def _primary_file_ref() -> Subquery:
    # A post's primary file is its most recently attached one.
    return (
        select(File.post_id.label("post_id"), func.max(File.id).label("file_id"))
        .group_by(File.post_id)
        .subquery("primary_file_ref")
    )


def _latest_audit_ref() -> Subquery:
    return (
        select(
            AuditLog.resource_id.label("post_id"),
            func.max(AuditLog.id).label("audit_id"),
        )
        .where(AuditLog.resource_type == RESOURCE_TYPE_POST)
        .group_by(AuditLog.resource_id)
        .subquery("latest_audit_ref")
    )


def _listing_from(post_filter: PostFilter, *, require_file: bool = True):
    file_ref = _primary_file_ref()
    audit_ref = _latest_audit_ref()

    from_clause = join(Post, User, Post.user_id == User.id, isouter=True)
    from_clause = from_clause.join(
        file_ref, file_ref.c.post_id == Post.id, isouter=not require_file
    ).join(
        primary_file, primary_file.id == file_ref.c.file_id, isouter=not require_file
    )
    from_clause = (
        from_clause.outerjoin(PostTag, PostTag.post_id == Post.id)
        .outerjoin(Tag, Tag.id == PostTag.tag_id)
        .outerjoin(audit_ref, audit_ref.c.post_id == Post.id)
        .outerjoin(latest_audit, latest_audit.id == audit_ref.c.audit_id)
    )
    if isinstance(post_filter, UserLikedFilter):
        from_clause = from_clause.join(UserLikePost, UserLikePost.post_id == Post.id)
    return from_clause


def _filter_predicate(post_filter: PostFilter) -> ColumnElement[bool]:
    if isinstance(post_filter, DefaultFilter | AdminManageFilter):
        return true()
    if isinstance(post_filter, TagNameFilter):
        return Tag.name == post_filter.tag_name
    if isinstance(post_filter, UserPublishedFilter):
        if post_filter.user_id is None:
            return false()
        return Post.user_id == post_filter.user_id
    if isinstance(post_filter, UserLikedFilter):
        if post_filter.user_id is None:
            return false()
        return UserLikePost.user_id == post_filter.user_id
    if isinstance(post_filter, CameraFilter):
        return and_(
            primary_file.exif["Make"].as_string() == post_filter.make,
            primary_file.exif["Model"].as_string() == post_filter.model,
        )
    if isinstance(post_filter, LensFilter):
        return and_(
            primary_file.exif["LensMake"].as_string() == post_filter.make,
            primary_file.exif["LensModel"].as_string() == post_filter.model,
        )
    if isinstance(post_filter, OwnedByFilter):
        if post_filter.user_id is None:
            return false()
        return Post.user_id == post_filter.user_id
    raise TypeError(f"Unhandled post filter: {post_filter!r}")


def _predicates(context: ListingContext) -> list[ColumnElement[bool]]:
    predicates = [_filter_predicate(context.post_filter)]
    if context.status is not None:
        predicates.append(Post.status == context.status.value)
    if context.audit_status is not None:
        predicates.append(latest_audit.status == str(context.audit_status))
    return predicates


def _aggregate_columns(principal: Principal):
    comment = aliased(Comment)
    like = aliased(UserLikePost)
    own_like = aliased(UserLikePost)

    total_comments = (
        select(func.count(comment.id))
        .where(comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("total_comments")
    )
    total_likes = (
        select(func.count())
        .select_from(like)
        .where(like.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("total_likes")
    )
    if principal.id is None:
        liked = literal(0).label("liked")
    else:
        liked = (
            select(func.count())
            .select_from(own_like)
            .where(own_like.post_id == Post.id, own_like.user_id == principal.id)
            .correlate(Post)
            .scalar_subquery()
            .label("liked")
        )
    return total_comments, total_likes, liked


_ROW_COLUMNS = (
    Post.id,
    Post.title,
    Post.content,
    Post.status,
    Post.created_at,
    User.id.label("user_id"),
    User.name.label("user_name"),
    primary_file.id.label("file_id"),
    primary_file.width.label("file_width"),
    primary_file.height.label("file_height"),
    latest_audit.id.label("audit_id"),
    latest_audit.status.label("audit_status"),
)

_GROUP_COLUMNS = (
    Post.id,
    Post.title,
    Post.content,
    Post.status,
    Post.created_at,
    User.id,
    User.name,
    primary_file.id,
    primary_file.width,
    primary_file.height,
    latest_audit.id,
    latest_audit.status,
)


def build_listing_statement(context: ListingContext) -> Select:
    """Compose the paginated listing statement for a context."""
    total_comments, total_likes, liked = _aggregate_columns(context.principal)

    if context.sort is SortKey.EARLIEST:
        order_by = (Post.id.asc(),)
    elif context.sort is SortKey.MOST_COMMENTS:
        order_by = (total_comments.desc(), Post.id.desc())
    else:
        order_by = (Post.id.desc(),)

    return (
        select(*_ROW_COLUMNS, total_comments, total_likes, liked)
        .select_from(_listing_from(context.post_filter))
        .where(*_predicates(context))
        # Tags fan rows out; grouping collapses them back to one row per post.
        .group_by(*_GROUP_COLUMNS)
        .order_by(*order_by)
        .limit(context.pagination.limit)
        .offset(context.pagination.offset)
    )


def build_count_statement(context: ListingContext) -> Select:
    """Compose the total-count statement using the listing's joins and predicates."""
    return (
        select(func.count(distinct(Post.id)))
        .select_from(_listing_from(context.post_filter))
        .where(*_predicates(context))
    )


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


# Largest value a 64-bit signed INTEGER column or bind parameter can carry.
MAX_BOUND_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class PostListing:
    items: list[PostResponse]
    total_count: int


def _load_tags(db: Session, post_ids: list[int]) -> dict[int, list[PostTagResponse]]:
    tags: dict[int, list[PostTagResponse]] = {post_id: [] for post_id in post_ids}
    if not post_ids:
        return tags
    rows = db.execute(
        select(PostTag.post_id, Tag.id, Tag.name)
        .join(Tag, Tag.id == PostTag.tag_id)
        .where(PostTag.post_id.in_(post_ids))
        .order_by(PostTag.post_id, Tag.id)
    ).all()
    for post_id, tag_id, tag_name in rows:
        tags[post_id].append(PostTagResponse(id=tag_id, name=tag_name))
    return tags


def _to_post_response(row, tags: list[PostTagResponse]) -> PostResponse:
    file = None
    if row.file_id is not None:
        file = PostFileSummary(id=row.file_id, width=row.file_width, height=row.file_height)
    audit = None
    if row.audit_id is not None:
        audit = PostAuditSummary(id=row.audit_id, status=row.audit_status)
    return PostResponse(
        id=row.id,
        title=row.title,
        content=row.content,
        status=row.status,
        created_at=row.created_at,
        user=PostOwner(id=row.user_id, name=row.user_name),
        file=file,
        tags=tags,
        total_comments=row.total_comments or 0,
        total_likes=row.total_likes or 0,
        liked=bool(row.liked),
        audit=audit,
    )


def _window_is_bindable(pagination: Pagination) -> bool:
    return pagination.limit <= MAX_BOUND_INTEGER and pagination.offset <= MAX_BOUND_INTEGER


def count_posts(db: Session, context: ListingContext) -> int:
    """Return how many posts match the context, ignoring pagination."""
    return int(db.execute(build_count_statement(context)).scalar_one())


def list_posts(db: Session, context: ListingContext) -> PostListing:
    """Execute the listing and its total count.

    Store errors propagate unchanged.
    """
    logger.debug(
        "Listing posts filter=%s sort=%s limit=%d offset=%d status=%s audit=%s",
        context.post_filter.name,
        context.sort.value,
        context.pagination.limit,
        context.pagination.offset,
        context.status,
        context.audit_status,
    )
    total_count = count_posts(db, context)
    if not _window_is_bindable(context.pagination):
        # Pages are unbounded; a window past any storable offset is just empty.
        logger.debug("Pagination window %s is beyond the store range", context.pagination)
        return PostListing(items=[], total_count=total_count)
    rows = db.execute(build_listing_statement(context)).all()
    tags = _load_tags(db, [row.id for row in rows])
    items = [_to_post_response(row, tags[row.id]) for row in rows]
    return PostListing(items=items, total_count=total_count)


def get_post_detail(db: Session, post_id: int, principal: Principal) -> PostResponse:
    """Fetch one post in the listing shape.

    Visibility is not checked here; callers gate the result afterwards.

    Raises:
        PostNotFoundError: If no post has the given id.
    """
    total_comments, total_likes, liked = _aggregate_columns(principal)
    statement = (
        select(*_ROW_COLUMNS, total_comments, total_likes, liked)
        .select_from(_listing_from(DefaultFilter(), require_file=False))
        .where(Post.id == post_id)
        .group_by(*_GROUP_COLUMNS)
    )
    row = db.execute(statement).first()
    if row is None:
        raise PostNotFoundError()
    return _to_post_response(row, _load_tags(db, [row.id])[row.id])
