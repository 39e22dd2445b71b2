# src/hottakes/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote on a post."""

    # Kept as a plain string so out-of-domain values reach the resolver and
    # are reported as INVALID_INPUT.
    value: str = Field(..., description="AGREE or DISAGREE")
