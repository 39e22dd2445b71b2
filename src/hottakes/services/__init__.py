# src/hottakes/services/__init__.py
"""Business logic services for the Hot Takes application."""

from .feed import FeedReader, PostPage, PostView
from .vote_service import VoteOutcome, VoteService

__all__ = [
    "FeedReader",
    "PostPage",
    "PostView",
    "VoteOutcome",
    "VoteService",
]
