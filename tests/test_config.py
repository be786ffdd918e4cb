import json

import pytest
from pydantic import ValidationError

from assetgen.config import Settings, StoredConfig, load_stored_config, resolve_storage_path
from assetgen.rate_limit import rate_limit_value


def test_missing_config_file_uses_defaults(tmp_path):
    stored = load_stored_config(tmp_path / "absent.json")
    assert stored == StoredConfig()
    assert stored.default_provider == "openai"
    assert stored.api_key is None
    assert stored.storage_path == "./generated-assets"


def test_loads_camel_case_record(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"provider": "stability", "apiKey": "sk-abc", "storagePath": "./assets"})
    )
    stored = load_stored_config(path)
    assert stored.default_provider == "stability"
    assert stored.api_key == "sk-abc"
    assert stored.storage_path == "./assets"


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2, 3]", '{"apiKey": 123}', '"just a string"'],
)
def test_malformed_config_falls_back_to_defaults(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)
    assert load_stored_config(path) == StoredConfig()


def test_null_provider_means_openai():
    assert StoredConfig(provider=None, api_key="k").default_provider == "openai"


def test_default_api_key_matches_configured_provider_only():
    stored = StoredConfig(provider="openai", api_key="sk-abc")
    assert stored.default_api_key("openai") == "sk-abc"
    assert stored.default_api_key("stability") is None


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("ASSETGEN__RATE_LIMIT_MAX_REQUESTS", "25")
    monkeypatch.setenv("ASSETGEN__ASSET_STORAGE_PATH", "/tmp/assets")
    settings = Settings(_env_file=None)
    assert settings.rate_limit_max_requests == 25
    assert settings.asset_storage_path == "/tmp/assets"
    assert settings.rate_limit_window_ms == 60000


def test_storage_path_prefers_settings_over_stored_config():
    stored = StoredConfig(storage_path="./from-config")
    assert str(resolve_storage_path(Settings(_env_file=None), stored)) == "from-config"
    overridden = Settings(_env_file=None, asset_storage_path="/srv/assets")
    assert str(resolve_storage_path(overridden, stored)) == "/srv/assets"


@pytest.mark.parametrize(
    "window_ms, expected",
    [(60000, "10 per 60 second"), (2000, "10 per 2 second"), (1000, "10 per 1 second")],
)
def test_rate_limit_value_uses_whole_seconds(window_ms, expected):
    settings = Settings(_env_file=None, rate_limit_window_ms=window_ms)
    assert rate_limit_value(settings) == expected


@pytest.mark.parametrize("window_ms", [1500, 999, 60001, 1])
def test_window_must_be_whole_seconds(window_ms):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, rate_limit_window_ms=window_ms)


def test_window_from_environment_is_checked(monkeypatch):
    monkeypatch.setenv("ASSETGEN__RATE_LIMIT_WINDOW_MS", "1500")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("provider", ["", None])
def test_stored_key_needs_a_stored_provider(provider):
    stored = StoredConfig(provider=provider, api_key="sk-abc")
    assert stored.default_provider == "openai"
    assert stored.default_api_key("openai") is None
