"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shutter_stage.models.post import PostStatus


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=255, description="Post title")
    content: str | None = Field(None, max_length=20000, description="Post body")
    status: PostStatus = Field(PostStatus.DRAFT, description="Initial publication state")


class PostUpdate(BaseModel):
    """Schema for partially updating a post."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, max_length=20000)
    status: PostStatus | None = None


class PostOwner(BaseModel):
    id: int
    name: str


class PostFileSummary(BaseModel):
    """Primary file shown alongside a post."""

    id: int
    width: int | None = None
    height: int | None = None


class PostAuditSummary(BaseModel):
    """Most recent moderation verdict for a post."""

    id: int
    status: str


class PostTagResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    content: str | None
    status: str
    created_at: datetime
    user: PostOwner
    file: PostFileSummary | None = None
    tags: list[PostTagResponse] = Field(default_factory=list)
    total_comments: int = 0
    total_likes: int = 0
    liked: bool = False
    audit: PostAuditSummary | None = None


class PostTagCreate(BaseModel):
    """Attach a tag by name, creating the tag when it does not exist."""

    name: str = Field(..., min_length=1, max_length=64)


class PostTagDelete(BaseModel):
    """Detach a tag from a post."""

    tag_id: int = Field(..., alias="tagId")

    model_config = ConfigDict(populate_by_name=True)
