import os

import pytest

from chlorpromazine.core.config import DEFAULT_SITES, ServerSettings


@pytest.fixture(autouse=True)
def _restore_env():
    original = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original)


def test_server_settings_reads_env(monkeypatch):
    monkeypatch.setenv("SERPAPI_KEY", "serp-key")
    monkeypatch.setenv("API_KEY", "bearer-key")
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setenv("SITE_FILTER", "example.com, docs.example.org")
    monkeypatch.setenv("RATE_LIMIT_MAX_CALLS", "7")

    settings = ServerSettings(_env_file=None)

    assert settings.serpapi_key.get_secret_value() == "serp-key"
    assert settings.api_key.get_secret_value() == "bearer-key"
    assert settings.server_port == 8123
    assert settings.search_sites == ["example.com", "docs.example.org"]
    assert settings.rate_limit_max_calls == 7


def test_defaults_disable_search_and_use_trusted_sites(monkeypatch):
    for name in ("SERPAPI_KEY", "SITE_FILTER", "APP_ENV", "HARDENED_ERRORS"):
        monkeypatch.delenv(name, raising=False)

    settings = ServerSettings(_env_file=None)

    assert settings.serpapi_key is None
    assert settings.search_sites == list(DEFAULT_SITES)
    assert settings.grounding_file_list == ["README.md", "CHANGELOG.md", "pyproject.toml"]
    assert settings.errors_hardened is False


def test_production_hardens_errors_unless_overridden():
    assert ServerSettings(_env_file=None, app_env="production").errors_hardened is True
    assert (
        ServerSettings(_env_file=None, app_env="production", hardened_errors=False).errors_hardened
        is False
    )
    assert ServerSettings(_env_file=None, hardened_errors=True).errors_hardened is True
