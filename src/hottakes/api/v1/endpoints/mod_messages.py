"""Staff moderation board endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from hottakes.api.v1.dependencies import EventBusDep, OptionalUserDep, SessionDep
from hottakes.models import ModMessage
from hottakes.schemas.mod_message import (
    ModMessageConnection,
    ModMessageCreate,
    ModMessageResponse,
)
from hottakes.services import mod_messages

router = APIRouter(prefix="/mod-messages", tags=["moderation"])


@router.get("/", response_model=ModMessageConnection)
async def list_mod_messages(
    db: SessionDep,
    current_user: OptionalUserDep,
    after: int | None = Query(None, description="Return messages older than this id"),
    limit: int | None = Query(None, ge=1),
) -> ModMessageConnection:
    """List board messages newest first (moderators and admins)."""
    page = mod_messages.list_messages(db, current_user, after=after, limit=limit)
    return ModMessageConnection(
        messages=[ModMessageResponse.model_validate(message) for message in page.messages],
        next_cursor=page.next_cursor,
    )


@router.post("/", response_model=ModMessageResponse, status_code=status.HTTP_201_CREATED)
async def add_mod_message(
    payload: ModMessageCreate,
    current_user: OptionalUserDep,
    db: SessionDep,
    event_bus: EventBusDep,
) -> ModMessage:
    """Post a message to the board."""
    return mod_messages.add_message(db, current_user, payload.content, event_bus=event_bus)


@router.delete("/{message_id}", response_model=ModMessageResponse)
async def remove_mod_message(
    message_id: int,
    current_user: OptionalUserDep,
    db: SessionDep,
    event_bus: EventBusDep,
) -> ModMessage:
    """Soft-delete a board message (its author or an admin)."""
    return mod_messages.remove_message(db, current_user, message_id, event_bus=event_bus)
