"""Config layering: defaults <- config.yaml <- environment."""

from __future__ import annotations

import pytest

from cep_race import config
from cep_race.providers.brasilapi import BrasilApiProvider
from cep_race.providers.defaults import (
    available_providers,
    create_default_providers,
    create_default_race,
)
from cep_race.providers.viacep import ViaCepProvider


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    for var in (
        "CEP_RACE_POSTAL_CODE",
        "CEP_RACE_TIMEOUT_S",
        "CEP_RACE_PROVIDERS",
        "CEP_RACE_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CEP_RACE_CONFIG", str(tmp_path / "missing.yaml"))
    return tmp_path


def test_defaults_without_yaml_or_env():
    assert config.default_postal_code() == "88905440"
    assert config.default_timeout_s() == 1.0
    assert config.report_failures() is True
    assert config.provider_priority() == ["brasilapi", "viacep"]
    assert config.log_level() == "WARNING"


def test_yaml_overrides_defaults(monkeypatch, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "lookup:\n  timeout_s: 2.5\n  report_failures: false\nproviders:\n  priority: [viacep]\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("CEP_RACE_CONFIG", str(path))
    assert config.default_timeout_s() == 2.5
    assert config.report_failures() is False
    assert config.provider_priority() == ["viacep"]
    # untouched keys keep their defaults
    assert config.default_postal_code() == "88905440"


def test_env_overrides_yaml(monkeypatch, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("lookup:\n  timeout_s: 2.5\n", encoding="utf-8")
    monkeypatch.setenv("CEP_RACE_CONFIG", str(path))
    monkeypatch.setenv("CEP_RACE_TIMEOUT_S", "0.75")
    monkeypatch.setenv("CEP_RACE_PROVIDERS", "viacep, brasilapi")
    monkeypatch.setenv("CEP_RACE_POSTAL_CODE", "01001000")
    monkeypatch.setenv("CEP_RACE_LOG_LEVEL", "debug")
    assert config.default_timeout_s() == 0.75
    assert config.provider_priority() == ["viacep", "brasilapi"]
    assert config.default_postal_code() == "01001000"
    assert config.log_level() == "DEBUG"


def test_non_mapping_yaml_is_ignored(monkeypatch, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setenv("CEP_RACE_CONFIG", str(path))
    assert config.provider_priority() == ["brasilapi", "viacep"]


class TestDefaultProviders:
    def test_built_in_names(self):
        assert available_providers() == ["brasilapi", "viacep"]

    def test_order_follows_priority(self):
        providers = create_default_providers(["viacep", "brasilapi"])
        assert isinstance(providers[0], ViaCepProvider)
        assert isinstance(providers[1], BrasilApiProvider)

    def test_order_from_config(self, monkeypatch):
        monkeypatch.setenv("CEP_RACE_PROVIDERS", "viacep")
        providers = create_default_providers()
        assert [p.provider_name for p in providers] == ["viacep"]

    def test_unknown_provider(self):
        with pytest.raises(KeyError, match="Unknown provider 'postmon'"):
            create_default_providers(["postmon"])

    def test_default_race_from_config(self):
        lookup = create_default_race()
        assert lookup.provider_names == ["brasilapi", "viacep"]
