"""YAML config loader with environment override."""

import json
import logging
import os
from pathlib import Path

import yaml

from simpleweather.config.schema import AppConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "WEATHERAPI_KEY"


def load_config(path: str | Path) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing file yields the built-in defaults. The WEATHERAPI_KEY
    environment variable, when set, overrides ``api.api_key``.
    """
    path = Path(path)
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        logger.info("Config file %s not found, using defaults", path)
        raw = {}

    env_key = os.environ.get(API_KEY_ENV, "")
    if env_key:
        raw["api"] = {**(raw.get("api") or {}), "api_key": env_key}

    return AppConfig(**raw)


def masked_config_json(config: AppConfig) -> str:
    """Config as indented JSON with the API key hidden."""
    data = json.loads(config.model_dump_json())
    if data["api"]["api_key"]:
        data["api"]["api_key"] = "***"
    return json.dumps(data, indent=2, ensure_ascii=False)
