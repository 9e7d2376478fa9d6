"""
Single-attempt HTTP GET shared by the provider clients.

Maps requests exceptions onto the provider error taxonomy so callers only
ever see TransportError, DecodeError or FetchTimeout.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from .base import DecodeError, FetchTimeout, TransportError

USER_AGENT = "cep-race/0.1"


def fetch_json(
    url: str,
    deadline_s: float,
    provider_name: str,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """GET url with a deadline and return the decoded JSON object. No retries."""
    getter = session.get if session is not None else requests.get
    try:
        resp = getter(
            url,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            timeout=deadline_s,
        )
        resp.raise_for_status()
    except requests.Timeout as exc:
        raise FetchTimeout(f"{provider_name}: no response within {deadline_s:g}s") from exc
    except requests.HTTPError as exc:
        raise TransportError(f"{provider_name}: HTTP {resp.status_code}") from exc
    except requests.RequestException as exc:
        raise TransportError(f"{provider_name}: {type(exc).__name__}: {exc}") from exc

    try:
        data = resp.json()
    except ValueError as exc:
        raise DecodeError(f"{provider_name}: response body is not JSON") from exc
    if not isinstance(data, dict):
        raise DecodeError(f"{provider_name}: unexpected response type {type(data).__name__}")
    return data


def text_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)
