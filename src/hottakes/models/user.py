# src/hottakes/models/user.py
"""SQLAlchemy models for user accounts."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hottakes.db.session import Base
from hottakes.db.time import utcnow

DEFAULT_BIO = "Hot takes enthusiast. Here to share opinions and spark debates."


class UserRole(str, enum.Enum):
    """Account roles, ordered by privilege."""

    USER = "USER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class User(Base):
    """Registered account that can post takes and vote on them."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Case-sensitive; uniqueness is enforced by the database.
    username: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.USER,
    )
    bio: Mapped[str] = mapped_column(String(200), nullable=False, default=DEFAULT_BIO)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
