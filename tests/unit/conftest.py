"""Shared fixtures for unit tests."""

import pytest


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point settings.json at an empty temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("SMART_COMPS_CONFIG_PATH", str(config_dir))
    return config_dir
