"""Cursor-paginated post listings annotated for the caller."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from hottakes.core.settings import settings
from hottakes.models.post import Post
from hottakes.models.user import User
from hottakes.models.vote import VoteValue
from hottakes.repositories.post_repo import PostRepository
from hottakes.repositories.vote_repo import VoteRepository
from hottakes.services.scoring import controversy_score


@dataclass(frozen=True)
class PostView:
    """A post together with the values derived for one viewer."""

    post: Post
    user_vote: VoteValue | None
    controversy_score: float | None


@dataclass(frozen=True)
class PostPage:
    """One page of a feed; `next_cursor` is None on the last page."""

    posts: list[PostView]
    next_cursor: int | None


def annotate(db: Session, posts: Sequence[Post], viewer: User | None) -> list[PostView]:
    """Attach the viewer's vote and the controversy score to each post.

    The viewer's votes for the whole batch are fetched with one query.
    """
    user_votes: dict[int, VoteValue] = {}
    if viewer is not None and posts:
        user_votes = VoteRepository(db).values_for_posts(viewer.id, [post.id for post in posts])

    return [
        PostView(
            post=post,
            user_vote=user_votes.get(post.id),
            controversy_score=controversy_score(post.agree_count, post.disagree_count),
        )
        for post in posts
    ]


class FeedReader:
    """Reads newest-first pages of visible posts."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)

    def page(
        self,
        viewer: User | None,
        *,
        after: int | None = None,
        owner_id: int | None = None,
        limit: int | None = None,
    ) -> PostPage:
        """Return the page of posts older than the `after` cursor.

        Args:
            viewer: Caller whose votes annotate the page, or None.
            after: Id of the last post on the previous page.
            owner_id: Restrict the feed to a single author.
            limit: Page size; defaults to the configured size and is capped.
        """
        size = limit or settings.feed_page_size
        size = max(1, min(size, settings.feed_max_page_size))

        # One extra row tells us whether another page exists.
        rows = self.posts.list_page(size + 1, after=after, owner_id=owner_id)
        has_more = len(rows) > size
        rows = rows[:size]
        next_cursor = rows[-1].id if has_more and rows else None

        return PostPage(posts=annotate(self.db, rows, viewer), next_cursor=next_cursor)
