"""Derived signals computed from post vote counters."""
from __future__ import annotations


def controversy_score(agree: int, disagree: int) -> float | None:
    """Return how evenly split the votes on a post are.

    1.0 is a perfect tie and 0.0 is a one-sided post. Posts without votes
    have no signal at all, so None is returned rather than 0.0.
    """
    high = max(agree, disagree)
    if agree + disagree <= 0 or high <= 0:
        return None
    return min(agree, disagree) / high
