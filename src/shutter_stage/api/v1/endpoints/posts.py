"""Post-related endpoints for the Shutter Stage API."""

from fastapi import APIRouter, Response, status

from shutter_stage.api.v1.dependencies import (
    AuthenticatedPrincipalDep,
    ListingContextDep,
    PrincipalDep,
    SessionDep,
)
from shutter_stage.core.settings import settings
from shutter_stage.models.audit_log import RESOURCE_TYPE_POST
from shutter_stage.schemas.post import (
    PostCreate,
    PostResponse,
    PostTagCreate,
    PostTagDelete,
    PostTagResponse,
    PostUpdate,
)
from shutter_stage.services.audit_log import AuditLogService
from shutter_stage.services.post_query import get_post_detail, list_posts
from shutter_stage.services.post_service import PostService
from shutter_stage.services.visibility import ensure_can_modify_post, ensure_can_view_post

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
async def index_posts(
    response: Response,
    db: SessionDep,
    context: ListingContextDep,
) -> list[PostResponse]:
    """List posts for the filter, sort, page and mode in the query string.

    The total number of matching posts is returned in the total-count header.

    Args:
        response: Outgoing response, used to set the total-count header
        db: Database session
        context: Request-scoped listing derivations

    Returns:
        One page of posts
    """
    listing = list_posts(db, context)
    response.headers[settings.total_count_header] = str(listing.total_count)
    return listing.items


@router.get("/{post_id}", response_model=PostResponse)
async def show_post(
    post_id: int,
    db: SessionDep,
    principal: PrincipalDep,
) -> PostResponse:
    """Get a specific post by ID.

    Raises:
        PostNotFoundError: If the post does not exist
        AccessDeniedError: If the caller may not view the post
    """
    post = get_post_detail(db, post_id, principal)
    latest_audit = AuditLogService(db).most_recent(RESOURCE_TYPE_POST, post_id)
    ensure_can_view_post(
        post_id=post.id,
        owner_id=post.user.id,
        status=post.status,
        latest_audit=latest_audit,
        principal=principal,
    )
    return post


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
) -> PostResponse:
    """Create a post owned by the caller."""
    post = PostService(db).create(
        user_id=principal.id,
        title=post_data.title,
        content=post_data.content,
        status=post_data.status,
    )
    return get_post_detail(db, post.id, principal)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
) -> PostResponse:
    """Update title, content or state of a post (owner or administrator)."""
    service = PostService(db)
    post = service.get(post_id)
    ensure_can_modify_post(owner_id=post.user_id, principal=principal)
    service.update(
        post,
        title=post_data.title,
        content=post_data.content,
        status=post_data.status,
    )
    return get_post_detail(db, post_id, principal)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
) -> None:
    """Delete a post and everything it owns (owner or administrator)."""
    service = PostService(db)
    post = service.get(post_id)
    ensure_can_modify_post(owner_id=post.user_id, principal=principal)
    service.delete(post)


@router.post(
    "/{post_id}/tag",
    response_model=PostTagResponse,
    status_code=status.HTTP_201_CREATED,
)
async def store_post_tag(
    post_id: int,
    tag_data: PostTagCreate,
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
) -> PostTagResponse:
    """Attach a tag to a post, creating the tag if it does not exist yet."""
    service = PostService(db)
    post = service.get(post_id)
    ensure_can_modify_post(owner_id=post.user_id, principal=principal)
    tag = service.attach_tag(post, tag_data.name)
    return PostTagResponse.model_validate(tag)


@router.delete("/{post_id}/tag", status_code=status.HTTP_204_NO_CONTENT)
async def destroy_post_tag(
    post_id: int,
    tag_data: PostTagDelete,
    db: SessionDep,
    principal: AuthenticatedPrincipalDep,
) -> None:
    """Detach a tag from a post."""
    service = PostService(db)
    post = service.get(post_id)
    ensure_can_modify_post(owner_id=post.user_id, principal=principal)
    service.detach_tag(post, tag_data.tag_id)
