# src/hottakes/models/vote.py
"""Models capturing agree/disagree votes on posts."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hottakes.db.session import Base
from hottakes.db.time import utcnow


class VoteValue(str, enum.Enum):
    """The two mutually exclusive opinions a user can hold on a post."""

    AGREE = "AGREE"
    DISAGREE = "DISAGREE"


class Vote(Base):
    """Per-user vote on a post; the ledger the post counters are derived from."""

    __tablename__ = "vote"
    __table_args__ = (
        # One live vote per (user, post); concurrent inserts rely on this.
        UniqueConstraint("user_id", "post_id", name="uq_vote_user_post"),
        Index("ix_vote_post_id", "post_id"),
        Index("ix_vote_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    value: Mapped[VoteValue] = mapped_column(Enum(VoteValue, name="vote_value"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
