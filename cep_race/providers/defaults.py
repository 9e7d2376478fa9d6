"""
Default provider configuration.

Maps built-in provider names to their clients and builds races from config.yaml settings.
To add a new provider, add it to _PROVIDER_FACTORIES and to the priority list.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .base import AddressProvider
from .brasilapi import BrasilApiProvider
from .race import AddressLookupRace
from .viacep import ViaCepProvider

logger = logging.getLogger(__name__)

_PROVIDER_FACTORIES: Dict[str, Callable[[], AddressProvider]] = {
    "brasilapi": BrasilApiProvider,
    "viacep": ViaCepProvider,
}


def available_providers() -> List[str]:
    return list(_PROVIDER_FACTORIES)


def create_default_providers(priority: Optional[List[str]] = None) -> List[AddressProvider]:
    """Instantiate built-in providers in the given order (config order when omitted)."""
    if priority is None:
        from ..config import provider_priority

        priority = provider_priority()
    providers: List[AddressProvider] = []
    for name in priority:
        factory = _PROVIDER_FACTORIES.get(name)
        if factory is None:
            raise KeyError(
                f"Unknown provider '{name}'. Available: {available_providers()}"
            )
        providers.append(factory())
    logger.debug("Built providers: %s", [p.provider_name for p in providers])
    return providers


def create_default_race(
    priority: Optional[List[str]] = None,
    per_call_timeout_s: Optional[float] = None,
    report_failures: Optional[bool] = None,
) -> AddressLookupRace:
    """Build an AddressLookupRace over the built-in providers; omitted settings come from config."""
    from .. import config

    timeout = per_call_timeout_s if per_call_timeout_s is not None else config.default_timeout_s()
    report = report_failures if report_failures is not None else config.report_failures()
    return AddressLookupRace(
        create_default_providers(priority),
        per_call_timeout_s=timeout,
        report_failures=report,
    )
