"""
ViaCEP postal-code provider.

Uses the public ViaCEP API (no authentication required):
  GET https://viacep.com.br/ws/{cep}/json/

Unknown postal codes come back as HTTP 200 with {"erro": true}.
"""

from __future__ import annotations

from typing import Optional

import requests

from .base import AddressRecord, DecodeError, utc_now_iso
from .http import fetch_json, text_field

VIACEP_BASE_URL = "https://viacep.com.br"


class ViaCepProvider:
    """Fetch addresses from the ViaCEP web service."""

    def __init__(
        self,
        base_url: str = VIACEP_BASE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session

    @property
    def provider_name(self) -> str:
        return "viacep"

    def fetch(self, key: str, deadline_s: float) -> AddressRecord:
        url = f"{self._base_url}/ws/{key}/json/"
        ts = utc_now_iso()
        data = fetch_json(url, deadline_s, self.provider_name, session=self._session)

        # "erro" is a bool in current responses and the string "true" in older ones
        if str(data.get("erro", "")).lower() == "true":
            raise DecodeError(f"viacep: postal code {key} not found")

        return AddressRecord(
            postal_code=text_field(data, "cep") or key,
            street=text_field(data, "logradouro"),
            neighborhood=text_field(data, "bairro"),
            city=text_field(data, "localidade"),
            state=text_field(data, "uf"),
            provider_name=self.provider_name,
            fetched_at_utc=ts,
        )
