"""
Reduce a race's outcomes to the single fastest valid address.

Selection compares the elapsed time captured when each provider answered;
nothing is re-measured here. Ties go to the outcome seen first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from .validation import is_valid_address

if TYPE_CHECKING:
    from .providers.base import AddressRecord, FetchOutcome


@dataclass(frozen=True)
class RaceResult:
    """Winner of a race plus every outcome that was considered. winner is None when empty."""

    winner: Optional[AddressRecord]
    outcomes: Tuple[FetchOutcome, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.winner is None

    @property
    def failures(self) -> Tuple[FetchOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.is_success)

    @property
    def invalid(self) -> Tuple[FetchOutcome, ...]:
        """Successful responses rejected because a required field was blank."""
        return tuple(o for o in self.outcomes if o.is_success and not is_valid_address(o.record))


def select_fastest_valid(outcomes: Iterable[FetchOutcome]) -> RaceResult:
    outcomes = tuple(outcomes)
    winner: Optional[AddressRecord] = None
    for outcome in outcomes:
        if not outcome.is_success:
            continue
        record = outcome.record
        if record.elapsed_s is None or not is_valid_address(record):
            continue
        # strict < keeps the first-seen record on ties
        if winner is None or record.elapsed_s < winner.elapsed_s:
            winner = record
    return RaceResult(winner=winner, outcomes=outcomes)
