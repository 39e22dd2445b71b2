"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hottakes.models.vote import VoteValue
from hottakes.schemas.user import UserResponse
from hottakes.services.feed import PostPage, PostView


class PostCreate(BaseModel):
    """Schema for creating a new post; length rules live in the post service."""

    content: str = Field(..., description="Text of the take")


class VoteCount(BaseModel):
    """Aggregate agree/disagree tally for a post."""

    agree: int
    disagree: int


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    content: str
    votes: VoteCount
    owner: UserResponse
    controversy_score: float | None = None
    user_vote: VoteValue | None = None
    created_at: datetime
    deleted: bool

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_view(cls, view: PostView) -> "PostResponse":
        post = view.post
        return cls(
            id=post.id,
            content=post.content,
            votes=VoteCount(agree=post.agree_count, disagree=post.disagree_count),
            owner=UserResponse.model_validate(post.owner),
            controversy_score=view.controversy_score,
            user_vote=view.user_vote,
            created_at=post.created_at,
            deleted=post.deleted,
        )


class PostConnection(BaseModel):
    """A page of posts plus the cursor for the next page."""

    posts: list[PostResponse]
    next_cursor: int | None = None

    @classmethod
    def from_page(cls, page: PostPage) -> "PostConnection":
        return cls(
            posts=[PostResponse.from_view(view) for view in page.posts],
            next_cursor=page.next_cursor,
        )


class ReconcileResponse(BaseModel):
    """Counters before and after a reconciliation run."""

    post_id: int
    before: VoteCount
    after: VoteCount
    drifted: bool
