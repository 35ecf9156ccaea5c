"""Shared fixtures: keep tests away from the user's real config and settings."""

import pytest
from shline.config import settings


@pytest.fixture(autouse=True)
def config_file(tmp_path, monkeypatch):
    """Point the stored-variable config file at a temporary location."""
    path = tmp_path / "shline-config" / "config.json"
    monkeypatch.setattr(settings, "CONFIG_FILE", path)
    return path


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Reset behaviour flags that the environment could have set."""
    monkeypatch.setattr(settings.appsettings, "noEnv", False)
    monkeypatch.setattr(settings.appsettings, "strict", False)
    monkeypatch.setattr(settings.appsettings, "beQuiet", True)
