"""Data access helpers for working with posts."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from hottakes.models.post import Post

if TYPE_CHECKING:
    from hottakes.services.vote_resolver import CounterDelta

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_visible(self, post_id: int) -> Post | None:
        """Return a post by identifier unless it has been soft-deleted."""
        result = self.session.execute(
            select(Post).where(Post.id == post_id, Post.deleted.is_(False))
        )
        return result.scalars().first()

    def reload(self, post_id: int) -> Post | None:
        """Re-read a post, overwriting any stale state held in the identity map."""
        result = self.session.execute(
            select(Post)
            .where(Post.id == post_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def list_page(
        self,
        limit: int,
        *,
        after: int | None = None,
        owner_id: int | None = None,
    ) -> list[Post]:
        """Return visible posts newest first, starting below the `after` cursor."""
        stmt = select(Post).where(Post.deleted.is_(False))
        if owner_id is not None:
            stmt = stmt.where(Post.owner_id == owner_id)
        if after is not None:
            stmt = stmt.where(Post.id < after)
        stmt = stmt.order_by(Post.id.desc()).limit(limit)
        result = self.session.execute(stmt)
        return list(result.scalars())

    def list_ids(self) -> list[int]:
        """Return every post id, deleted rows included."""
        result = self.session.execute(select(Post.id).order_by(Post.id))
        return list(result.scalars())

    def create(self, *, owner_id: int, content: str) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(owner_id=owner_id, content=content, agree_count=0, disagree_count=0)
        self.session.add(post)
        self.session.flush()
        return post

    def apply_counter_delta(self, post_id: int, delta: CounterDelta) -> None:
        """Atomically add `delta` to the post's counters.

        Issued as a single ``UPDATE ... SET agree_count = agree_count + :n`` so
        concurrent voters never overwrite each other's increments.
        """
        if delta.is_zero:
            return
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(
                agree_count=Post.agree_count + delta.agree,
                disagree_count=Post.disagree_count + delta.disagree,
            )
            .execution_options(synchronize_session=False)
        )

    def set_counters(self, post_id: int, *, agree: int, disagree: int) -> None:
        """Overwrite the counters with absolute values (reconciliation only)."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(agree_count=agree, disagree_count=disagree)
            .execution_options(synchronize_session=False)
        )

    def soft_delete(self, post: Post) -> Post:
        """Mark a post as deleted while keeping it for audit."""
        post.deleted = True
        self.session.flush()
        return post
