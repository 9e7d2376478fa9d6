"""
Address usability check applied before a provider response can win a race.
"""

from __future__ import annotations

from typing import Any

REQUIRED_FIELDS = ("street", "neighborhood", "city", "state")


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def is_valid_address(record: Any) -> bool:
    """True iff street, neighborhood, city and state are all non-blank. Pure; safe across threads."""
    return not any(_blank(getattr(record, name, None)) for name in REQUIRED_FIELDS)


def missing_fields(record: Any) -> list[str]:
    """Names of required fields that are blank, in declaration order."""
    return [name for name in REQUIRED_FIELDS if _blank(getattr(record, name, None))]
