"""
Pytest configuration for integration tests

Patches YAML loading to replace the Docker Redis hostname with localhost for
tests running on the host machine.

Run with: pytest -m integration
"""

from unittest import mock

import pytest

import config.settings
from config.settings import Settings
from core.utils.config import load_yaml_safe


def _patched_load_yaml_safe(path):
    """Load YAML and point the Redis cache at localhost"""
    data = load_yaml_safe(path)

    if "market_data.yaml" in path:
        redis = data.get("cache", {}).get("redis")
        if redis is not None:
            redis["host"] = "localhost"

    return data


def _reset_settings():
    """Force Settings to reload YAML on next get_settings()"""
    if hasattr(Settings, "_yaml_loaded"):
        delattr(Settings, "_yaml_loaded")
    config.settings._settings_instance = None


@pytest.fixture(autouse=True, scope="session")
def localhost_settings():
    with mock.patch("config.settings.load_yaml_safe", side_effect=_patched_load_yaml_safe):
        _reset_settings()
        yield
    _reset_settings()
