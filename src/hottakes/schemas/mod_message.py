"""Schemas for the staff moderation board."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hottakes.models.user import UserRole
from hottakes.schemas.user import UserResponse


class ModMessageCreate(BaseModel):
    """Payload for posting to the board."""

    content: str = Field(..., description="Message text")


class ModMessageResponse(BaseModel):
    """Board message as returned to staff."""

    id: int
    content: str
    owner: UserResponse
    role: UserRole
    created_at: datetime
    deleted: bool

    model_config = ConfigDict(from_attributes=True)


class ModMessageConnection(BaseModel):
    """A page of board messages plus the cursor for the next page."""

    messages: list[ModMessageResponse]
    next_cursor: int | None = None
