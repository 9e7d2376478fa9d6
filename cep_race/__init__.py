"""
Top-level public API surface.
Race several CEP providers for one postal code and keep the fastest valid address.
Does not import cli.
"""

from __future__ import annotations

from ._version import __version__
from .providers import (
    AddressLookupRace,
    AddressRecord,
    FetchOutcome,
    OutcomeKind,
    race,
)
from .selector import RaceResult, select_fastest_valid
from .validation import is_valid_address

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "AddressLookupRace",
    "AddressRecord",
    "FetchOutcome",
    "OutcomeKind",
    "RaceResult",
    "is_valid_address",
    "race",
    "select_fastest_valid",
]
