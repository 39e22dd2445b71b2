"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hottakes.models.user import UserRole


class UserCreate(BaseModel):
    """Registration payload; format rules are enforced by the user service."""

    username: str = Field(..., min_length=1, max_length=64, description="Case-sensitive username")
    password: str = Field(..., min_length=1, max_length=128, description="Plain-text password")


class LoginRequest(BaseModel):
    """Credentials exchanged for a bearer token."""

    username: str
    password: str


class TokenResponse(BaseModel):
    """Bearer token returned after a successful login."""

    access_token: str
    token_type: str = "bearer"


class RoleUpdate(BaseModel):
    """Payload for changing a user's role."""

    role: str = Field(..., description="USER, MODERATOR or ADMIN")


class UserResponse(BaseModel):
    """Public user information."""

    id: int
    username: str
    role: UserRole
    bio: str
    created_at: datetime
    deleted: bool

    model_config = ConfigDict(from_attributes=True)
