"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every categorical service error."""

    detail: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Error kind, e.g. NOT_FOUND or INVALID_INPUT")
