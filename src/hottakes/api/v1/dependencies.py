"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hottakes.core.errors import NotAuthenticatedError
from hottakes.core.security import decode_access_token
from hottakes.db.session import get_db
from hottakes.models import User
from hottakes.services.events import EventBus, get_event_bus
from hottakes.services.user_service import get_user

# Anonymous callers are allowed through; services decide what needs identity.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the user identified by the bearer token, or None.

    Missing, malformed, expired or orphaned tokens all resolve to an
    anonymous caller.

    Args:
        credentials: HTTP Bearer token credentials, if any
        db: Database session
    """
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        return None
    return get_user(db, user_id)


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_current_user(user: OptionalUserDep) -> User:
    """Return the authenticated user or raise NOT_AUTHENTICATED."""
    if user is None:
        raise NotAuthenticatedError("Could not validate credentials")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_event_bus_dep() -> EventBus:
    """Return the shared event bus."""
    return get_event_bus()


EventBusDep = Annotated[EventBus, Depends(get_event_bus_dep)]
