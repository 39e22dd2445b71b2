"""SQLAlchemy models for the Hot Takes application."""

from .mod_message import ModMessage
from .post import Post
from .user import User, UserRole
from .vote import Vote, VoteValue

__all__ = [
    "ModMessage",
    "Post",
    "User", "UserRole",
    "Vote", "VoteValue",
]
