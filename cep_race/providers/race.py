"""
Provider race: concurrent fan-out of one postal-code query to every provider.

Each provider runs in its own thread with its own deadline. Outcomes are
collected in arrival order; the call returns once every provider has either
answered, failed, or run out of time. A fast success never cancels a slower
provider, and a result arriving after the deadline is discarded.

Threads cannot be killed, so a straggler keeps running until its own HTTP
timeout fires. race() has already returned by then, but the interpreter joins
those worker threads at exit, so a short-lived process (the CLI) may outlive
the race deadline by up to the requests per-operation timeout.
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from typing import Dict, List, Sequence, Tuple, Union

from ..selector import RaceResult, select_fastest_valid
from ..validation import missing_fields
from .base import (
    AddressProvider,
    FetchOutcome,
    OutcomeKind,
    ProviderError,
    ProviderHealth,
)

logger = logging.getLogger(__name__)

ProviderSpec = Union[AddressProvider, Tuple[str, AddressProvider]]


def _named(providers: Sequence[ProviderSpec]) -> List[Tuple[str, AddressProvider]]:
    named: List[Tuple[str, AddressProvider]] = []
    seen = set()
    for spec in providers:
        if isinstance(spec, tuple):
            name, provider = spec
        else:
            name, provider = spec.provider_name, spec
        if name in seen:
            raise ValueError(f"Duplicate provider name in race: {name!r}")
        seen.add(name)
        named.append((name, provider))
    return named


def _run_unit(
    name: str, provider: AddressProvider, key: str, per_call_timeout_s: float
) -> FetchOutcome:
    """One race unit: time the fetch, stamp elapsed, and turn any error into a failure outcome."""
    start = time.monotonic()
    try:
        record = provider.fetch(key, per_call_timeout_s)
    except ProviderError as exc:
        return FetchOutcome.failure(name, exc.kind, str(exc), time.monotonic() - start)
    except Exception as exc:
        logger.exception("Provider %s raised unexpectedly for %s", name, key)
        return FetchOutcome.failure(
            name,
            OutcomeKind.TRANSPORT_ERROR,
            f"{type(exc).__name__}: {exc}",
            time.monotonic() - start,
        )

    elapsed = time.monotonic() - start
    if elapsed > per_call_timeout_s:
        return FetchOutcome.failure(
            name,
            OutcomeKind.TIMEOUT,
            f"{name}: answered after {elapsed:.3f}s, deadline {per_call_timeout_s:g}s",
            elapsed,
        )
    logger.debug("Provider %s answered %s in %.3fs", name, key, elapsed)
    return FetchOutcome.success(record.with_elapsed(elapsed, provider_name=name))


def race(
    key: str,
    providers: Sequence[ProviderSpec],
    per_call_timeout_s: float,
    *,
    report_failures: bool = True,
) -> List[FetchOutcome]:
    """
    Query every provider for `key` concurrently and return their outcomes.

    `providers` holds AddressProvider instances or (name, provider) pairs.
    Outcomes are in arrival order, at most one per provider. With
    report_failures=False failed calls are dropped instead of returned.
    Wall time is bounded by per_call_timeout_s, not by the number of providers.
    """
    if per_call_timeout_s <= 0:
        raise ValueError(f"per_call_timeout_s must be positive, got {per_call_timeout_s}")
    named = _named(providers)
    if not named:
        return []

    outcomes: List[FetchOutcome] = []
    executor = concurrent.futures.ThreadPoolExecutor(
        max_workers=len(named), thread_name_prefix="cep-race"
    )
    try:
        futures: Dict[concurrent.futures.Future, str] = {
            executor.submit(_run_unit, name, provider, key, per_call_timeout_s): name
            for name, provider in named
        }
        collected = set()
        try:
            for future in concurrent.futures.as_completed(futures, timeout=per_call_timeout_s):
                outcomes.append(future.result())
                collected.add(futures[future])
        except concurrent.futures.TimeoutError:
            for future, name in futures.items():
                if name in collected:
                    continue
                if future.done():
                    outcomes.append(future.result())
                else:
                    outcomes.append(
                        FetchOutcome.failure(
                            name,
                            OutcomeKind.TIMEOUT,
                            f"{name}: no response within {per_call_timeout_s:g}s",
                            per_call_timeout_s,
                        )
                    )
    finally:
        # Stragglers keep running in the background; their results are never read.
        executor.shutdown(wait=False, cancel_futures=True)

    for outcome in outcomes:
        if not outcome.is_success:
            logger.warning(
                "Provider %s failed for %s (%s): %s",
                outcome.provider_name, key, outcome.kind.value, outcome.error_message,
            )

    if not report_failures:
        dropped = [o for o in outcomes if not o.is_success]
        if dropped:
            logger.debug("Suppressing %d failed outcome(s) for %s", len(dropped), key)
        outcomes = [o for o in outcomes if o.is_success]
    return outcomes


class AddressLookupRace:
    """
    Race a fixed set of providers for each lookup and keep their health.

    lookup() returns the fastest valid answer, or an empty RaceResult when no
    provider produced a valid address in time.
    """

    def __init__(
        self,
        providers: Sequence[ProviderSpec],
        per_call_timeout_s: float = 1.0,
        report_failures: bool = True,
    ) -> None:
        if per_call_timeout_s <= 0:
            raise ValueError(f"per_call_timeout_s must be positive, got {per_call_timeout_s}")
        self._providers = _named(providers)
        self._per_call_timeout_s = per_call_timeout_s
        self._report_failures = report_failures
        self._health: Dict[str, ProviderHealth] = {
            name: ProviderHealth(provider_name=name) for name, _ in self._providers
        }

    @property
    def provider_names(self) -> List[str]:
        return [name for name, _ in self._providers]

    def lookup(self, key: str) -> RaceResult:
        """Race all providers for `key` and select the fastest valid address."""
        # Health needs every outcome, including the ones the caller asked to suppress.
        outcomes = race(key, self._providers, self._per_call_timeout_s, report_failures=True)
        for outcome in outcomes:
            health = self._health[outcome.provider_name]
            if not outcome.is_success:
                health.record_failure(outcome.error_message or outcome.kind.value)
            elif outcome.record.is_valid():
                health.record_success(outcome.elapsed_s)
            else:
                missing = ", ".join(missing_fields(outcome.record))
                health.record_failure(f"{outcome.provider_name}: incomplete address (missing {missing})")

        if not self._report_failures:
            outcomes = [o for o in outcomes if o.is_success]
        result = select_fastest_valid(outcomes)
        if result.is_empty:
            logger.warning("No valid address for %s from %s", key, ", ".join(self.provider_names))
        else:
            logger.info(
                "Fastest valid address for %s from %s in %.3fs",
                key, result.winner.provider_name, result.winner.elapsed_s,
            )
        return result

    def get_health(self) -> Dict[str, ProviderHealth]:
        """Return health status for all providers in the race."""
        return dict(self._health)
