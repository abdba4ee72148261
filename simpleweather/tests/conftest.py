"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from simpleweather.config.schema import AppConfig


@pytest.fixture(autouse=True)
def no_env_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's WEATHERAPI_KEY out of config tests."""
    monkeypatch.delenv("WEATHERAPI_KEY", raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def forecast_json(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "weatherapi_forecast_moscow.json") as f:
        return json.load(f)


@pytest.fixture
def app_config() -> AppConfig:
    """Config pointed at a fake API host with no loading delay."""
    return AppConfig(
        api={"base_url": "https://test-weather.example.com/v1", "api_key": "test-key"},
        loader={"loading_delay_ms": 0},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {
            "base_url": "https://test-weather.example.com/v1",
            "api_key": "test-key",
        },
        "loader": {"loading_delay_ms": 0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
