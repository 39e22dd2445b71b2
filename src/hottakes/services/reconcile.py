"""Counter reconciliation.

Recomputes post counters from the vote ledger. This is a repair tool for
drift left behind by failures outside the transactional vote path; normal
voting never calls it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from hottakes.core.errors import NotFoundError
from hottakes.repositories.post_repo import PostRepository
from hottakes.repositories.vote_repo import VoteRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    """Counters before and after reconciling one post."""

    post_id: int
    before: tuple[int, int]
    after: tuple[int, int]

    @property
    def drifted(self) -> bool:
        return self.before != self.after


def reconcile_post(db: Session, post_id: int, *, commit: bool = True) -> ReconcileResult:
    """Reset one post's counters to the number of ledger rows per value.

    Soft-deleted posts are reconciled too; their votes remain in storage.
    """
    posts = PostRepository(db)
    post = posts.reload(post_id)
    if post is None:
        raise NotFoundError("post not found")

    before = (post.agree_count, post.disagree_count)
    agree, disagree = VoteRepository(db).count_by_value(post_id)
    if before != (agree, disagree):
        logger.warning(
            "Counter drift on post %s: stored=%s ledger=%s",
            post_id,
            before,
            (agree, disagree),
        )
        posts.set_counters(post_id, agree=agree, disagree=disagree)
        if commit:
            db.commit()
        posts.reload(post_id)

    return ReconcileResult(post_id=post_id, before=before, after=(agree, disagree))


def reconcile_all(db: Session) -> list[ReconcileResult]:
    """Reconcile every post in one transaction and return the drifted ones."""
    results = [
        reconcile_post(db, post_id, commit=False)
        for post_id in PostRepository(db).list_ids()
    ]
    db.commit()
    drifted = [result for result in results if result.drifted]
    logger.info("Reconciled %d posts, %d had drifted", len(results), len(drifted))
    return drifted
