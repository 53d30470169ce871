"""Shared pytest fixtures for objekt tests."""

import random

import pytest

import objekt.config as config_module
from objekt.config import reset_config
from objekt.randoms import reset_default


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temp dir and drop cached settings/default facade."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_dir / "config.json")
    for name in (
        "OBJEKT_SEED",
        "OBJEKT_COLLECTION_SIZE_MIN",
        "OBJEKT_COLLECTION_SIZE_MAX",
        "OBJEKT_STRING_LENGTH_MIN",
        "OBJEKT_STRING_LENGTH_MAX",
        "OBJEKT_RANDOMIZATION_DEPTH",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_default()
    yield config_dir
    reset_config()
    reset_default()


@pytest.fixture
def rng():
    """Seeded generator for reproducible sampling."""
    return random.Random(42)
