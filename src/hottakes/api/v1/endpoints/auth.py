# src/hottakes/api/v1/endpoints/auth.py
"""Authentication endpoints for the Hot Takes API."""

from __future__ import annotations

from fastapi import APIRouter, status

from hottakes.api.v1.dependencies import SessionDep
from hottakes.core.security import create_access_token
from hottakes.models import User
from hottakes.schemas.user import LoginRequest, TokenResponse, UserCreate, UserResponse
from hottakes.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, db: SessionDep) -> User:
    """Create a new account with the USER role."""
    return user_service.create_user(db, payload.username, payload.password)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange a username and password for a bearer token."""
    user = user_service.authenticate(db, payload.username, payload.password)
    return TokenResponse(access_token=create_access_token(user.id))
