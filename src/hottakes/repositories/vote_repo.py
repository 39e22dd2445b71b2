"""Data access helpers for the vote ledger."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hottakes.core.errors import VoteConflictError
from hottakes.models.vote import Vote, VoteValue

__all__ = ["VoteRepository"]


class VoteRepository:
    """Thin wrapper around database access for vote rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_for(self, user_id: int, post_id: int) -> Vote | None:
        """Return the vote `user_id` holds on `post_id`, if any."""
        result = self.session.execute(
            select(Vote).where(Vote.user_id == user_id, Vote.post_id == post_id)
        )
        return result.scalars().first()

    def insert(self, *, user_id: int, post_id: int, value: VoteValue) -> Vote:
        """Insert a new vote and flush it so the unique constraint is checked now.

        Raises:
            VoteConflictError: If another vote for (user, post) already exists.
        """
        vote = Vote(user_id=user_id, post_id=post_id, value=value)
        self.session.add(vote)
        try:
            self.session.flush()
        except IntegrityError as err:
            raise VoteConflictError(
                f"vote for user {user_id} on post {post_id} already exists"
            ) from err
        return vote

    def delete(self, vote: Vote) -> None:
        """Remove a vote from the ledger if it still holds the value it was read with.

        Raises:
            VoteConflictError: If a concurrent request already removed or
                flipped the row.
        """
        result = self.session.execute(
            delete(Vote)
            .where(Vote.id == vote.id, Vote.value == vote.value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise VoteConflictError(f"vote {vote.id} changed before it could be removed")
        self.session.expunge(vote)

    def update_value(self, vote: Vote, value: VoteValue) -> Vote:
        """Flip an existing vote in place if it still holds the value it was read with.

        Raises:
            VoteConflictError: If a concurrent request already removed or
                flipped the row.
        """
        result = self.session.execute(
            update(Vote)
            .where(Vote.id == vote.id, Vote.value == vote.value)
            .values(value=value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise VoteConflictError(f"vote {vote.id} changed before it could be flipped")
        self.session.expire(vote, ["value"])
        return vote

    def values_for_posts(self, user_id: int, post_ids: Iterable[int]) -> dict[int, VoteValue]:
        """Return the user's votes for many posts with a single query."""
        ids = list(post_ids)
        if not ids:
            return {}
        result = self.session.execute(
            select(Vote.post_id, Vote.value).where(
                Vote.user_id == user_id,
                Vote.post_id.in_(ids),
            )
        )
        return {post_id: value for post_id, value in result.all()}

    def count_by_value(self, post_id: int) -> tuple[int, int]:
        """Return ``(agree, disagree)`` row counts for a post."""
        result = self.session.execute(
            select(Vote.value, func.count())
            .where(Vote.post_id == post_id)
            .group_by(Vote.value)
        )
        counts = {value: total for value, total in result.all()}
        return counts.get(VoteValue.AGREE, 0), counts.get(VoteValue.DISAGREE, 0)
