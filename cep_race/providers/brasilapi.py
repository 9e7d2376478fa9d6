"""
BrasilAPI postal-code provider.

Uses the public BrasilAPI (no authentication required):
  GET https://brasilapi.com.br/api/cep/v1/{cep}
"""

from __future__ import annotations

from typing import Optional

import requests

from .base import AddressRecord, utc_now_iso
from .http import fetch_json, text_field

BRASILAPI_BASE_URL = "https://brasilapi.com.br"


class BrasilApiProvider:
    """Fetch addresses from BrasilAPI's CEP v1 endpoint."""

    def __init__(
        self,
        base_url: str = BRASILAPI_BASE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session

    @property
    def provider_name(self) -> str:
        return "brasilapi"

    def fetch(self, key: str, deadline_s: float) -> AddressRecord:
        url = f"{self._base_url}/api/cep/v1/{key}"
        ts = utc_now_iso()
        data = fetch_json(url, deadline_s, self.provider_name, session=self._session)

        return AddressRecord(
            postal_code=text_field(data, "cep") or key,
            street=text_field(data, "street"),
            neighborhood=text_field(data, "neighborhood"),
            city=text_field(data, "city"),
            state=text_field(data, "state"),
            provider_name=self.provider_name,
            fetched_at_utc=ts,
        )
