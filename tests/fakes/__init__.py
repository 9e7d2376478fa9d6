"""Fake address providers for race, selector and lookup tests (no live network)."""

from .providers import (
    FAKE_FETCHED_AT,
    FakeAddressProvider,
    FakeAddressProviderFailNThenSucceed,
    FakeBrokenProvider,
    FakeFailingProvider,
    FakeIncompleteProvider,
    make_record,
)

__all__ = [
    "FAKE_FETCHED_AT",
    "FakeAddressProvider",
    "FakeAddressProviderFailNThenSucceed",
    "FakeBrokenProvider",
    "FakeFailingProvider",
    "FakeIncompleteProvider",
    "make_record",
]
