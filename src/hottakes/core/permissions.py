"""Role and ownership predicates.

Call sites compose these explicitly, e.g. ``owns(actor, post) or
can_moderate(actor)`` for post removal.
"""
from __future__ import annotations

from typing import Any

from hottakes.core.errors import ForbiddenError, NotAuthenticatedError
from hottakes.models.user import User, UserRole


def is_admin(actor: User | None) -> bool:
    """Return True if the actor holds the ADMIN role."""
    return actor is not None and actor.role is UserRole.ADMIN


def can_moderate(actor: User | None) -> bool:
    """Return True if the actor is staff (MODERATOR or ADMIN)."""
    return actor is not None and actor.role in (UserRole.MODERATOR, UserRole.ADMIN)


def owns(actor: User | None, resource: Any) -> bool:
    """Return True if `resource.owner_id` refers to the actor."""
    if actor is None or resource is None:
        return False
    return getattr(resource, "owner_id", None) == actor.id


def require_actor(actor: User | None, message: str = "authentication required") -> User:
    """Return the actor or raise NOT_AUTHENTICATED."""
    if actor is None:
        raise NotAuthenticatedError(message)
    return actor


def require(allowed: bool, message: str = "not authorized") -> None:
    """Raise FORBIDDEN unless the composed predicate evaluated to True."""
    if not allowed:
        raise ForbiddenError(message)
