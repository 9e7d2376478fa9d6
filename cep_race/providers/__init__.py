"""
Postal-code address providers and the race that queries them concurrently.

Each provider wraps one public CEP web service behind the AddressProvider
protocol. A race fans a query out to every provider at once, each bounded by
its own deadline, and hands the outcomes to the selector.
"""

from __future__ import annotations

from .base import (
    AddressProvider,
    AddressRecord,
    DecodeError,
    FetchOutcome,
    FetchTimeout,
    OutcomeKind,
    ProviderError,
    ProviderHealth,
    ProviderStatus,
    TransportError,
)
from .brasilapi import BrasilApiProvider
from .race import AddressLookupRace, race
from .viacep import ViaCepProvider

__all__ = [
    "AddressProvider",
    "AddressRecord",
    "FetchOutcome",
    "OutcomeKind",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "FetchTimeout",
    "ProviderHealth",
    "ProviderStatus",
    "BrasilApiProvider",
    "ViaCepProvider",
    "AddressLookupRace",
    "race",
]
