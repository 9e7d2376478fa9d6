"""
Provider interfaces and data contracts.

Every provider implements AddressProvider: given a postal code it performs one
bounded-time HTTP fetch and decodes the body into an AddressRecord.

Data is returned via frozen dataclasses for immutability and type safety.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from ..validation import is_valid_address


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class OutcomeKind(enum.Enum):
    """How a single provider call ended."""

    SUCCESS = "SUCCESS"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    TIMEOUT = "TIMEOUT"


class ProviderStatus(enum.Enum):
    """Health status of a data provider."""

    OK = "OK"
    DEGRADED = "DEGRADED"
    DOWN = "DOWN"


class ProviderError(RuntimeError):
    """Base class for failures of a single provider call."""

    kind = OutcomeKind.TRANSPORT_ERROR


class TransportError(ProviderError):
    """Network or connection failure, including HTTP error statuses."""

    kind = OutcomeKind.TRANSPORT_ERROR


class DecodeError(ProviderError):
    """Body could not be decoded into an address."""

    kind = OutcomeKind.DECODE_ERROR


class FetchTimeout(ProviderError):
    """Deadline elapsed before the call completed."""

    kind = OutcomeKind.TIMEOUT


@dataclass(frozen=True)
class AddressRecord:
    """Immutable address decoded from one provider response."""

    postal_code: str
    street: str
    neighborhood: str
    city: str
    state: str
    provider_name: str
    fetched_at_utc: str
    elapsed_s: Optional[float] = None

    def is_valid(self) -> bool:
        return is_valid_address(self)

    def with_elapsed(self, elapsed_s: float, provider_name: Optional[str] = None) -> AddressRecord:
        """Return a copy stamped with the measured round-trip time (and the racer's name for the provider)."""
        return replace(self, elapsed_s=elapsed_s, provider_name=provider_name or self.provider_name)


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one provider call inside a race: a record or a failure reason."""

    provider_name: str
    kind: OutcomeKind
    record: Optional[AddressRecord] = None
    error_message: Optional[str] = None
    elapsed_s: Optional[float] = None

    @classmethod
    def success(cls, record: AddressRecord) -> FetchOutcome:
        return cls(
            provider_name=record.provider_name,
            kind=OutcomeKind.SUCCESS,
            record=record,
            elapsed_s=record.elapsed_s,
        )

    @classmethod
    def failure(
        cls,
        provider_name: str,
        kind: OutcomeKind,
        error_message: str,
        elapsed_s: Optional[float] = None,
    ) -> FetchOutcome:
        if kind is OutcomeKind.SUCCESS:
            raise ValueError("failure outcome cannot have kind SUCCESS")
        return cls(
            provider_name=provider_name,
            kind=kind,
            error_message=error_message[:500],
            elapsed_s=elapsed_s,
        )

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS and self.record is not None


@dataclass
class ProviderHealth:
    """Mutable health state for a single provider instance."""

    provider_name: str
    status: ProviderStatus = ProviderStatus.OK
    last_ok_at: Optional[str] = None
    fail_count: int = 0
    last_error: Optional[str] = None
    last_elapsed_s: Optional[float] = None

    def record_success(self, elapsed_s: Optional[float] = None) -> None:
        self.status = ProviderStatus.OK
        self.fail_count = 0
        self.last_ok_at = utc_now_iso()
        self.last_error = None
        self.last_elapsed_s = elapsed_s

    def record_failure(self, error: str) -> None:
        self.fail_count += 1
        self.last_error = error[:500]
        if self.fail_count >= 5:
            self.status = ProviderStatus.DOWN
        elif self.fail_count >= 2:
            self.status = ProviderStatus.DEGRADED


@runtime_checkable
class AddressProvider(Protocol):
    """Protocol for postal-code address providers."""

    @property
    def provider_name(self) -> str: ...

    def fetch(self, key: str, deadline_s: float) -> AddressRecord:
        """
        Fetch the address for a postal code, giving up after deadline_s seconds.

        Raises TransportError, DecodeError or FetchTimeout. Does not stamp elapsed_s.
        """
        ...
