"""
Load config from config.yaml with optional env overrides.
Single source of truth for the default postal code, timeout, provider order and log level.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import List

import yaml

# Defaults if no YAML or env
_DEFAULTS = {
    "lookup": {
        "postal_code": "88905440",
        "timeout_s": 1.0,
        "report_failures": True,
    },
    "providers": {"priority": ["brasilapi", "viacep"]},
    "logging": {"level": "WARNING"},
}


def _config_yaml_path() -> Path:
    """Config.yaml lives at repo root (parent of package dir). CEP_RACE_CONFIG overrides."""
    override = os.environ.get("CEP_RACE_CONFIG")
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    config_path = _config_yaml_path()
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides() -> dict:
    overrides: dict = {}
    postal_code = os.environ.get("CEP_RACE_POSTAL_CODE")
    if postal_code:
        overrides.setdefault("lookup", {})["postal_code"] = postal_code
    timeout = os.environ.get("CEP_RACE_TIMEOUT_S")
    if timeout:
        overrides.setdefault("lookup", {})["timeout_s"] = timeout
    providers = os.environ.get("CEP_RACE_PROVIDERS")
    if providers:
        names = [p.strip() for p in providers.split(",") if p.strip()]
        overrides.setdefault("providers", {})["priority"] = names
    level = os.environ.get("CEP_RACE_LOG_LEVEL")
    if level:
        overrides.setdefault("logging", {})["level"] = level
    return overrides


def get_config() -> dict:
    """Return merged config: defaults <- config.yaml <- env."""
    merged = _deep_merge(_DEFAULTS, _load_yaml())
    merged = _deep_merge(merged, _env_overrides())
    return merged


# Convenience accessors
def default_postal_code() -> str:
    return str(get_config()["lookup"]["postal_code"])


def default_timeout_s() -> float:
    return float(get_config()["lookup"]["timeout_s"])


def report_failures() -> bool:
    return bool(get_config()["lookup"]["report_failures"])


def provider_priority() -> List[str]:
    return list(get_config()["providers"]["priority"])


def log_level() -> str:
    return str(get_config()["logging"]["level"]).upper()
