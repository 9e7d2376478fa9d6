"""
CLI: cep-race [POSTAL_CODE] [--timeout SECONDS] [--log-level LEVEL]

Races the configured CEP providers for one postal code, prints every answer
and then the fastest valid one. Always exits 0.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from cep_race import config
from cep_race.providers.base import AddressRecord
from cep_race.providers.defaults import create_default_race
from cep_race.selector import RaceResult
from cep_race.validation import missing_fields

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _print_record(record: AddressRecord) -> None:
    print(f"API Provider: {record.provider_name}")
    print(f"CEP: {record.postal_code}")
    print(f"Street: {record.street}")
    print(f"Neighborhood: {record.neighborhood}")
    print(f"City: {record.city}")
    print(f"State: {record.state}")
    if record.elapsed_s is not None:
        print(f"Response time: {record.elapsed_s * 1000:.1f}ms")
    print("")


def render(result: RaceResult, postal_code: str) -> None:
    for outcome in result.outcomes:
        if outcome.is_success:
            _print_record(outcome.record)
    for outcome in result.failures:
        print(f"Failed: {outcome.provider_name} ({outcome.kind.value}): {outcome.error_message}")
    for outcome in result.invalid:
        missing = ", ".join(missing_fields(outcome.record))
        print(f"Incomplete address from {outcome.provider_name} (missing {missing}), not eligible")

    if result.is_empty:
        print(f"No valid result for {postal_code}")
    else:
        print(f"Fastest provider for this lookup: {result.winner.provider_name}")


def _positive_seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return seconds


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="cep-race",
        description="Look up a Brazilian postal code on several providers at once and keep the fastest valid answer",
    )
    parser.add_argument("postal_code", nargs="?", default=None, help="CEP to look up (default from config)")
    parser.add_argument(
        "--timeout", type=_positive_seconds, default=None, help="Per-provider deadline in seconds"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default from config)",
    )
    args = parser.parse_args(argv)

    # Bad values from config.yaml or the environment get the same usage error as bad flags
    level = args.log_level or config.log_level()
    if level not in LOG_LEVELS:
        parser.error(f"invalid log level {level!r} in config; choose from {', '.join(LOG_LEVELS)}")
    timeout = args.timeout
    if timeout is None:
        try:
            timeout = _positive_seconds(str(config.default_timeout_s()))
        except (ValueError, argparse.ArgumentTypeError) as exc:
            parser.error(f"invalid timeout in config: {exc}")

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    postal_code = args.postal_code or config.default_postal_code()
    lookup_race = create_default_race(per_call_timeout_s=timeout)
    result = lookup_race.lookup(postal_code)
    render(result, postal_code)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
