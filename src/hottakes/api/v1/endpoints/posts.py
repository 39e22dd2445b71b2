# src/hottakes/api/v1/endpoints/posts.py
"""Post and vote endpoints for the Hot Takes API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from hottakes.api.v1.dependencies import (
    CurrentUserDep,
    EventBusDep,
    OptionalUserDep,
    SessionDep,
)
from hottakes.core.permissions import is_admin, require
from hottakes.models.vote import VoteValue
from hottakes.schemas.post import (
    PostConnection,
    PostCreate,
    PostResponse,
    ReconcileResponse,
    VoteCount,
)
from hottakes.schemas.vote import VoteCreate
from hottakes.services import post_service, reconcile
from hottakes.services.feed import FeedReader, PostView, annotate
from hottakes.services.reconcile import ReconcileResult
from hottakes.services.scoring import controversy_score
from hottakes.services.vote_service import VoteService

router = APIRouter(prefix="/posts", tags=["posts"])


def _reconcile_response(result: ReconcileResult) -> ReconcileResponse:
    return ReconcileResponse(
        post_id=result.post_id,
        before=VoteCount(agree=result.before[0], disagree=result.before[1]),
        after=VoteCount(agree=result.after[0], disagree=result.after[1]),
        drifted=result.drifted,
    )


@router.get("/", response_model=PostConnection)
async def list_posts(
    db: SessionDep,
    current_user: OptionalUserDep,
    after: int | None = Query(None, description="Return posts older than this post id"),
    limit: int | None = Query(None, ge=1, description="Page size"),
) -> PostConnection:
    """List visible posts newest first, annotated with the caller's votes."""
    page = FeedReader(db).page(current_user, after=after, limit=limit)
    return PostConnection.from_page(page)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: OptionalUserDep,
    db: SessionDep,
    event_bus: EventBusDep,
) -> PostResponse:
    """Create a new take owned by the caller."""
    post = post_service.create_post(db, current_user, post_data.content, event_bus=event_bus)
    return PostResponse.from_view(annotate(db, [post], current_user)[0])


@router.post("/reconcile", response_model=list[ReconcileResponse])
async def reconcile_all_posts(current_user: CurrentUserDep, db: SessionDep) -> list[ReconcileResponse]:
    """Recompute every post's counters from the vote ledger (admins only).

    Only posts whose counters had drifted are returned.
    """
    require(is_admin(current_user), "only admins can reconcile counters")
    return [_reconcile_response(result) for result in reconcile.reconcile_all(db)]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep, current_user: OptionalUserDep) -> PostResponse:
    """Get a specific post by ID."""
    return PostResponse.from_view(post_service.get_post_view(db, post_id, current_user))


@router.delete("/{post_id}", response_model=PostResponse)
async def remove_post(
    post_id: int,
    current_user: OptionalUserDep,
    db: SessionDep,
    event_bus: EventBusDep,
) -> PostResponse:
    """Soft-delete a post (owner, moderator or admin)."""
    post = post_service.remove_post(db, current_user, post_id, event_bus=event_bus)
    return PostResponse.from_view(annotate(db, [post], current_user)[0])


@router.post("/{post_id}/vote", response_model=PostResponse)
async def cast_vote(
    post_id: int,
    vote_data: VoteCreate,
    current_user: OptionalUserDep,
    db: SessionDep,
    event_bus: EventBusDep,
) -> PostResponse:
    """Agree or disagree with a post.

    Re-submitting the current value removes the vote; submitting the other
    value flips it.
    """
    outcome = VoteService(db, event_bus=event_bus).cast_vote(current_user, post_id, vote_data.value)
    post = outcome.post
    view = PostView(
        post=post,
        user_vote=outcome.user_vote,
        controversy_score=controversy_score(post.agree_count, post.disagree_count),
    )
    return PostResponse.from_view(view)


@router.get("/{post_id}/my-vote")
async def get_my_vote(
    post_id: int,
    current_user: OptionalUserDep,
    db: SessionDep,
) -> dict[str, VoteValue | None]:
    """Get the caller's current vote on a post."""
    return {"value": post_service.get_user_vote(db, current_user, post_id)}


@router.post("/{post_id}/reconcile", response_model=ReconcileResponse)
async def reconcile_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReconcileResponse:
    """Recompute one post's counters from the vote ledger (admins only)."""
    require(is_admin(current_user), "only admins can reconcile counters")
    return _reconcile_response(reconcile.reconcile_post(db, post_id))
