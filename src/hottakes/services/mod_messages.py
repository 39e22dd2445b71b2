"""Staff-only moderation board."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from hottakes.core.errors import InvalidInputError, NotFoundError
from hottakes.core.permissions import can_moderate, is_admin, owns, require, require_actor
from hottakes.core.settings import settings
from hottakes.models.mod_message import ModMessage
from hottakes.models.user import User
from hottakes.services.events import MOD_MESSAGE, EventBus, publish_safely


@dataclass(frozen=True)
class ModMessagePage:
    """One page of board messages; `next_cursor` is None on the last page."""

    messages: list[ModMessage]
    next_cursor: int | None


def list_messages(
    db: Session,
    actor: User | None,
    *,
    after: int | None = None,
    limit: int | None = None,
) -> ModMessagePage:
    """Return board messages newest first; staff only."""
    actor = require_actor(actor)
    require(can_moderate(actor))

    size = max(1, min(limit or settings.feed_page_size, settings.feed_max_page_size))
    stmt = select(ModMessage).where(ModMessage.deleted.is_(False))
    if after is not None:
        stmt = stmt.where(ModMessage.id < after)
    rows = list(db.execute(stmt.order_by(ModMessage.id.desc()).limit(size + 1)).scalars())

    has_more = len(rows) > size
    rows = rows[:size]
    return ModMessagePage(messages=rows, next_cursor=rows[-1].id if has_more and rows else None)


def add_message(
    db: Session,
    actor: User | None,
    content: str,
    *,
    event_bus: EventBus | None = None,
) -> ModMessage:
    """Post a message to the board as the acting staff member."""
    actor = require_actor(actor)
    require(can_moderate(actor))

    text = (content or "").strip()
    if not text:
        raise InvalidInputError("Content cannot be empty")
    if len(text) > settings.mod_message_max_length:
        raise InvalidInputError("Content exceeds maximum length")

    message = ModMessage(content=text, owner_id=actor.id, role=actor.role)
    db.add(message)
    db.commit()
    db.refresh(message)

    publish_safely(
        event_bus,
        MOD_MESSAGE,
        {"type": "ADDED", "message_id": message.id, "content": message.content},
    )
    return message


def remove_message(
    db: Session,
    actor: User | None,
    message_id: int,
    *,
    event_bus: EventBus | None = None,
) -> ModMessage:
    """Soft-delete a board message; allowed for its author and for admins."""
    actor = require_actor(actor)
    require(can_moderate(actor))

    message = db.execute(
        select(ModMessage).where(ModMessage.id == message_id, ModMessage.deleted.is_(False))
    ).scalars().first()
    if message is None:
        raise NotFoundError("message not found")

    require(owns(actor, message) or is_admin(actor), "You can only remove your own messages")

    message.deleted = True
    db.commit()
    db.refresh(message)

    publish_safely(event_bus, MOD_MESSAGE, {"type": "REMOVED", "message_id": message.id})
    return message
