"""Shared pytest fixtures and configuration."""

import pytest

from src import constants
from src.config_store import ConfigStore


@pytest.fixture
def store():
    """Empty config store isolated from the process environment."""
    config_store = ConfigStore(environ={})
    yield config_store
    # Unset all keys used by the test
    config_store.reset()


@pytest.fixture
def store_with_defaults():
    """Config store holding the defaults registered by the CLI."""
    config_store = ConfigStore(defaults=constants.DEFAULTS, environ={})
    yield config_store
    config_store.reset()


@pytest.fixture
def required_values():
    """Values for every required key."""
    return {
        constants.CONTAINER_ID_KEY: "test-container-id",
        constants.CONTAINER_NAME_KEY: "test-container-name",
        constants.LOG_DRIVER_TYPE_KEY: "test-log-driver",
    }


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""

    def _write(content: str):
        path = tmp_path / "config.yaml"
        path.write_text(content)
        return path

    return _write
