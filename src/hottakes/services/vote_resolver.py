"""Vote state machine.

Maps a user's current vote on a post (or its absence) and a newly requested
value to exactly one ledger mutation, the counter delta that keeps the post
tally consistent with the ledger, and the user's resulting vote.

======== =========== ============ ====================== ==========
existing requested   action       counter delta          final vote
======== =========== ============ ====================== ==========
none     V           INSERT(V)    V +1                   V
V        V           REMOVE       V -1                   none
V        W           REPLACE(W)   V -1, W +1             W
======== =========== ============ ====================== ==========

Nothing here touches the database.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hottakes.core.errors import InvalidInputError
from hottakes.models.vote import VoteValue


class VoteAction(str, Enum):
    """Ledger mutation selected for a vote request."""

    INSERT = "insert"
    REMOVE = "remove"
    REPLACE = "replace"


@dataclass(frozen=True)
class CounterDelta:
    """Signed change to apply to a post's agree/disagree counters."""

    agree: int = 0
    disagree: int = 0

    @classmethod
    def for_value(cls, value: VoteValue, amount: int) -> CounterDelta:
        if value is VoteValue.AGREE:
            return cls(agree=amount)
        return cls(disagree=amount)

    def __add__(self, other: CounterDelta) -> CounterDelta:
        return CounterDelta(
            agree=self.agree + other.agree,
            disagree=self.disagree + other.disagree,
        )

    @property
    def is_zero(self) -> bool:
        return self.agree == 0 and self.disagree == 0


@dataclass(frozen=True)
class VoteTransition:
    """Decision returned by :func:`resolve_transition`.

    Attributes:
        action: Ledger mutation to perform.
        value: Value to write for INSERT/REPLACE; None for REMOVE.
        delta: Counter change matching the mutation.
        final_vote: The user's vote once the mutation has been applied.
    """

    action: VoteAction
    value: VoteValue | None
    delta: CounterDelta
    final_vote: VoteValue | None


def parse_vote_value(raw: object) -> VoteValue:
    """Return the :class:`VoteValue` named by `raw`.

    Raises:
        InvalidInputError: If `raw` is not exactly AGREE or DISAGREE.
    """
    if isinstance(raw, VoteValue):
        return raw
    if isinstance(raw, str):
        try:
            return VoteValue(raw)
        except ValueError:
            pass
    raise InvalidInputError("invalid vote type")


def resolve_transition(existing: VoteValue | None, requested: object) -> VoteTransition:
    """Decide how a vote request changes the ledger and the post counters.

    Args:
        existing: The user's current vote on the post, or None.
        requested: The submitted value; validated before the table is consulted.

    Returns:
        The single transition that applies.

    Raises:
        InvalidInputError: If `requested` is outside the two-valued vote domain.
    """
    value = parse_vote_value(requested)

    if existing is None:
        return VoteTransition(
            action=VoteAction.INSERT,
            value=value,
            delta=CounterDelta.for_value(value, 1),
            final_vote=value,
        )

    if existing is value:
        return VoteTransition(
            action=VoteAction.REMOVE,
            value=None,
            delta=CounterDelta.for_value(value, -1),
            final_vote=None,
        )

    return VoteTransition(
        action=VoteAction.REPLACE,
        value=value,
        delta=CounterDelta.for_value(existing, -1) + CounterDelta.for_value(value, 1),
        final_vote=value,
    )
