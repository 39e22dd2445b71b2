"""User endpoints."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, Query

from hottakes.api.v1.dependencies import OptionalUserDep, SessionDep
from hottakes.models import User
from hottakes.schemas.post import PostConnection
from hottakes.schemas.user import RoleUpdate, UserResponse
from hottakes.services import user_service
from hottakes.services.feed import FeedReader

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserResponse])
async def list_users(db: SessionDep) -> Sequence[User]:
    """Return all active users."""
    return user_service.list_users(db)


@router.get("/me", response_model=UserResponse | None)
async def me(current_user: OptionalUserDep) -> User | None:
    """Return the caller, or null for anonymous requests."""
    return current_user


@router.get("/{username}", response_model=UserResponse)
async def find_user(username: str, db: SessionDep) -> User:
    """Look a user up by exact username."""
    return user_service.find_user(db, username)


@router.put("/{user_id}/role", response_model=UserResponse)
async def set_user_role(
    user_id: int,
    payload: RoleUpdate,
    current_user: OptionalUserDep,
    db: SessionDep,
) -> User:
    """Change a user's role (admins only)."""
    return user_service.set_user_role(db, current_user, user_id, payload.role)


@router.get("/{owner_id}/posts", response_model=PostConnection)
async def list_user_posts(
    owner_id: int,
    db: SessionDep,
    current_user: OptionalUserDep,
    after: int | None = Query(None, description="Return posts older than this post id"),
    limit: int | None = Query(None, ge=1, description="Page size"),
) -> PostConnection:
    """List one author's posts, newest first."""
    page = FeedReader(db).page(current_user, after=after, owner_id=owner_id, limit=limit)
    return PostConnection.from_page(page)
