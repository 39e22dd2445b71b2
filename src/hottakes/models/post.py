# src/hottakes/models/post.py
"""SQLAlchemy models for posts and their vote counters."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hottakes.core.settings import POST_CONTENT_COLUMN_LENGTH
from hottakes.db.session import Base
from hottakes.db.time import utcnow
from hottakes.models.user import User


class Post(Base):
    """A short opinion ("take") that other users agree or disagree with.

    ``agree_count`` and ``disagree_count`` cache the number of matching rows in
    the vote ledger. They are only changed through atomic increments issued by
    the vote service or by reconciliation.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("agree_count >= 0", name="ck_post_agree_count_non_negative"),
        CheckConstraint("disagree_count >= 0", name="ck_post_disagree_count_non_negative"),
        Index("ix_post_owner_id", "owner_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(String(POST_CONTENT_COLUMN_LENGTH), nullable=False)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id"),
        nullable=False,
    )

    agree_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    disagree_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    owner: Mapped[User] = relationship("User", lazy="joined")
