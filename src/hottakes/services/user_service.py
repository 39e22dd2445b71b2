"""Account helpers: registration, login and role management."""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hottakes.core import security
from hottakes.core.errors import InvalidInputError, NotFoundError
from hottakes.core.permissions import is_admin, require, require_actor
from hottakes.models.user import User, UserRole

__all__ = [
    "authenticate",
    "create_user",
    "find_user",
    "get_user",
    "list_users",
    "set_user_role",
    "validate_new_user",
]

USERNAME_PATTERN: Final = re.compile(r"^[a-zA-Z0-9_-]{3,20}$")
PASSWORD_PATTERN: Final = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^A-Za-z0-9])[^\s]{12,64}$"
)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single non-deleted user by primary key."""
    return db.execute(
        select(User).where(User.id == user_id, User.deleted.is_(False))
    ).scalars().first()


def list_users(db: Session) -> Sequence[User]:
    """Return all non-deleted users ordered by id."""
    return db.execute(
        select(User).where(User.deleted.is_(False)).order_by(User.id)
    ).scalars().all()


def find_user(db: Session, username: str) -> User:
    """Return the user with exactly `username` (case-sensitive)."""
    user = db.execute(
        select(User).where(User.username == username, User.deleted.is_(False))
    ).scalars().first()
    if user is None:
        raise NotFoundError("user not found")
    return user


def validate_new_user(db: Session, username: str, password: str) -> None:
    """Check username format, password strength and username availability."""
    if not USERNAME_PATTERN.match(username):
        raise InvalidInputError(
            "Username must be 3-20 characters (letters, numbers, underscore, hyphen)"
        )
    if not PASSWORD_PATTERN.match(password):
        raise InvalidInputError(
            "Password must be at least 12 characters and include uppercase, "
            "lowercase, number, and symbol"
        )
    taken = db.execute(select(User.id).where(User.username == username)).first()
    if taken is not None:
        raise InvalidInputError("username already exists")


def create_user(db: Session, username: str, password: str) -> User:
    """Persist a new user with a hashed password."""
    validate_new_user(db, username, password)
    user = User(
        username=username,
        password_hash=security.hash_password(password),
        role=UserRole.USER,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        # Lost a race against a concurrent registration of the same name.
        db.rollback()
        raise InvalidInputError("username already exists") from err
    db.refresh(user)
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user for valid credentials or raise INVALID_INPUT."""
    user = db.execute(
        select(User).where(User.username == username, User.deleted.is_(False))
    ).scalars().first()
    if user is None or not security.verify_password(password, user.password_hash):
        raise InvalidInputError("bad credentials")
    return user


def set_user_role(db: Session, actor: User | None, user_id: int, role: object) -> User:
    """Change another user's role; admins only."""
    actor = require_actor(actor)
    require(is_admin(actor), "only admins can change roles")

    try:
        new_role = role if isinstance(role, UserRole) else UserRole(str(role))
    except ValueError as err:
        raise InvalidInputError("invalid role") from err

    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("user not found")

    user.role = new_role
    db.commit()
    db.refresh(user)
    return user
