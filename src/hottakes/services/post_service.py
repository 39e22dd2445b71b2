"""Service-level helpers for creating, reading and removing posts."""
from __future__ import annotations

from sqlalchemy.orm import Session

from hottakes.core.errors import InvalidInputError, NotFoundError
from hottakes.core.permissions import can_moderate, owns, require, require_actor
from hottakes.core.settings import settings
from hottakes.models.post import Post
from hottakes.models.user import User
from hottakes.models.vote import VoteValue
from hottakes.repositories.post_repo import PostRepository
from hottakes.repositories.vote_repo import VoteRepository
from hottakes.services.events import POST_ADDED, POST_REMOVED, EventBus, publish_safely
from hottakes.services.feed import PostView, annotate


def validate_content(content: str | None) -> str:
    """Return trimmed post content or raise INVALID_INPUT."""
    text = (content or "").strip()
    if not text:
        raise InvalidInputError("Content cannot be empty")
    if len(text) < settings.post_min_length:
        raise InvalidInputError(
            f"Content must be at least {settings.post_min_length} characters"
        )
    if len(text) > settings.post_max_length:
        raise InvalidInputError("Content exceeds maximum length")
    return text


def create_post(
    db: Session,
    actor: User | None,
    content: str,
    *,
    event_bus: EventBus | None = None,
) -> Post:
    """Persist a new post owned by `actor` and announce it after commit."""
    actor = require_actor(actor, "must be logged in to create post")
    text = validate_content(content)

    post = PostRepository(db).create(owner_id=actor.id, content=text)
    db.commit()
    db.refresh(post)

    publish_safely(
        event_bus,
        POST_ADDED,
        {"post_id": post.id, "owner_id": post.owner_id, "content": post.content},
    )
    return post


def get_post_view(db: Session, post_id: int, viewer: User | None) -> PostView:
    """Return a visible post annotated for `viewer`."""
    post = PostRepository(db).get_visible(post_id)
    if post is None:
        raise NotFoundError("post not found")
    return annotate(db, [post], viewer)[0]


def remove_post(
    db: Session,
    actor: User | None,
    post_id: int,
    *,
    event_bus: EventBus | None = None,
) -> Post:
    """Soft-delete a post; allowed for its owner and for staff."""
    actor = require_actor(actor)
    repo = PostRepository(db)
    post = repo.get_visible(post_id)
    if post is None:
        raise NotFoundError("post not found")

    require(owns(actor, post) or can_moderate(actor), "You can only remove your own posts")

    repo.soft_delete(post)
    db.commit()
    db.refresh(post)

    publish_safely(event_bus, POST_REMOVED, {"post_id": post.id})
    return post


def get_user_vote(db: Session, actor: User | None, post_id: int) -> VoteValue | None:
    """Return the actor's current vote on a visible post."""
    actor = require_actor(actor)
    if PostRepository(db).get_visible(post_id) is None:
        raise NotFoundError("post not found")
    vote = VoteRepository(db).get_for(actor.id, post_id)
    return vote.value if vote is not None else None
