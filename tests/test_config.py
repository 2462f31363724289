from pathlib import Path

import pytest

from synthkit.config import DEFAULT_BASE_URL, Settings


def test_defaults_from_empty_environment() -> None:
    settings = Settings.from_env({})
    assert settings.data_dir == Path("datasets")
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.metric_availability_path is None
    assert settings.cache_size == 100
    assert settings.cache_ttl_seconds == 3600


def test_values_read_from_environment() -> None:
    settings = Settings.from_env(
        {
            "SYNTHKIT_DATA_DIR": "/tmp/synth",
            "SYNTHKIT_BASE_URL": "https://data.example.com/",
            "SYNTHKIT_METRIC_AVAILABILITY": "/etc/availability.json",
            "SYNTHKIT_CACHE_SIZE": "5",
            "SYNTHKIT_CACHE_TTL_SECONDS": "60",
        }
    )
    assert settings.data_dir == Path("/tmp/synth")
    assert settings.base_url == "https://data.example.com"
    assert settings.metric_availability_path == Path("/etc/availability.json")
    assert settings.cache_size == 5
    assert settings.cache_ttl_seconds == 60


def test_invalid_cache_settings_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(cache_size=0)
    with pytest.raises(ValueError):
        Settings(cache_ttl_seconds=-1)
