"""Transactional vote casting.

A vote request runs as one database transaction: load the post, load the
caller's current vote, resolve the transition, mutate the ledger, and apply
the counter delta with an atomic increment. Either all of it commits or none
of it does.

Every ledger write is guarded against concurrent requests from the same user:
an insert relies on the (user, post) unique constraint, and a removal or flip
only matches the row if it still holds the value this request read. A lost
race rolls the attempt back and re-derives the request from the committed
state. If a concurrent request already produced the vote this request was
aiming for, the request is treated as satisfied, so a double-submit leaves
one ledger change and one counter change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hottakes.core.errors import (
    InternalError,
    NotFoundError,
    ServiceError,
    VoteConflictError,
)
from hottakes.core.permissions import require_actor
from hottakes.core.settings import settings
from hottakes.models.post import Post
from hottakes.models.user import User
from hottakes.models.vote import Vote, VoteValue
from hottakes.repositories.post_repo import PostRepository
from hottakes.repositories.vote_repo import VoteRepository
from hottakes.services.events import POST_UPDATED, EventBus, publish_safely
from hottakes.services.vote_resolver import (
    VoteAction,
    VoteTransition,
    parse_vote_value,
    resolve_transition,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a committed vote request.

    Attributes:
        post: The post re-read after commit, carrying the new counters.
        user_vote: The caller's vote after the request, or None.
        transition: The applied transition; None when a retry found that a
            concurrent request had already produced the requested vote.
    """

    post: Post
    user_vote: VoteValue | None
    transition: VoteTransition | None


@dataclass(frozen=True)
class _Target:
    vote: VoteValue | None


class VoteService:
    """Casts votes against the ledger and the post counters atomically."""

    def __init__(
        self,
        db: Session,
        event_bus: EventBus | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.votes = VoteRepository(db)
        self.event_bus = event_bus
        self.max_attempts = max(1, max_attempts or settings.vote_conflict_max_attempts)

    def cast_vote(self, actor: User | None, post_id: int, value: object) -> VoteOutcome:
        """Apply `value` from `actor` to `post_id`.

        Args:
            actor: Authenticated user, or None for anonymous callers.
            post_id: Target post identifier.
            value: Requested vote, AGREE or DISAGREE.

        Returns:
            The committed outcome.

        Raises:
            NotAuthenticatedError: If `actor` is None.
            InvalidInputError: If `value` is not a valid vote.
            NotFoundError: If the post does not exist or was deleted.
            InternalError: On storage failure or when conflicts persist
                past the configured number of attempts.
        """
        actor = require_actor(actor, "must be logged in to vote")
        actor_id = actor.id
        requested = parse_vote_value(value)

        # Vote the first conflicting attempt was aiming for.
        target: _Target | None = None
        for attempt in range(1, self.max_attempts + 1):
            transition: VoteTransition | None = None
            try:
                post = self.posts.get_visible(post_id)
                if post is None:
                    raise NotFoundError("post not found")
                existing = self.votes.get_for(actor_id, post_id)
                current = existing.value if existing is not None else None

                if target is not None and current is target.vote:
                    outcome = VoteOutcome(post=post, user_vote=current, transition=None)
                else:
                    transition = resolve_transition(current, requested)
                    outcome = self._write(actor_id, post_id, existing, requested, transition)
                self.db.commit()
            except VoteConflictError:
                self.db.rollback()
                logger.info(
                    "Vote conflict for user %s on post %s (attempt %d/%d)",
                    actor_id,
                    post_id,
                    attempt,
                    self.max_attempts,
                )
                if target is None and transition is not None:
                    target = _Target(transition.final_vote)
                continue
            except ServiceError:
                self.db.rollback()
                raise
            except SQLAlchemyError as err:
                self.db.rollback()
                logger.exception("Failed to record vote for user %s on post %s", actor_id, post_id)
                raise InternalError("failed to record vote") from err

            self._publish(outcome)
            return outcome

        logger.warning(
            "Giving up on vote for user %s on post %s after %d conflicting attempts",
            actor_id,
            post_id,
            self.max_attempts,
        )
        raise InternalError("vote could not be recorded, please retry")

    def _write(
        self,
        actor_id: int,
        post_id: int,
        existing: Vote | None,
        requested: VoteValue,
        transition: VoteTransition,
    ) -> VoteOutcome:
        if existing is None:
            self.votes.insert(user_id=actor_id, post_id=post_id, value=requested)
        elif transition.action is VoteAction.REMOVE:
            self.votes.delete(existing)
        else:
            self.votes.update_value(existing, requested)

        self.posts.apply_counter_delta(post_id, transition.delta)

        refreshed = self.posts.reload(post_id)
        if refreshed is None:  # pragma: no cover - row locked by the update above
            raise NotFoundError("post not found")
        return VoteOutcome(post=refreshed, user_vote=transition.final_vote, transition=transition)

    def _publish(self, outcome: VoteOutcome) -> None:
        if outcome.transition is None:
            return
        post = outcome.post
        publish_safely(
            self.event_bus,
            POST_UPDATED,
            {
                "post_id": post.id,
                "votes": {"agree": post.agree_count, "disagree": post.disagree_count},
            },
        )
