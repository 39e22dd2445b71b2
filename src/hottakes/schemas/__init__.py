"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse
from .mod_message import ModMessageConnection, ModMessageCreate, ModMessageResponse
from .post import PostConnection, PostCreate, PostResponse, ReconcileResponse, VoteCount
from .user import LoginRequest, RoleUpdate, TokenResponse, UserCreate, UserResponse
from .vote import VoteCreate

__all__ = [
    "ErrorResponse",
    "ModMessageConnection", "ModMessageCreate", "ModMessageResponse",
    "PostConnection", "PostCreate", "PostResponse", "ReconcileResponse", "VoteCount",
    "LoginRequest", "RoleUpdate", "TokenResponse", "UserCreate", "UserResponse",
    "VoteCreate",
]
