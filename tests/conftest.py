import os

import pytest

from unitime import ConfigManager, ManualClock
from unitime.core.config_manager import default_config_manager


BASE_MS = 1_693_470_768_154


@pytest.fixture(autouse=True)
def _clear_unitime_env(monkeypatch):
    """Keep UNITIME_* variables from the outer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("UNITIME_"):
            monkeypatch.delenv(name, raising=False)
    default_config_manager.cache_clear()
    yield
    default_config_manager.cache_clear()


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(config_dir=tmp_path / "config")


@pytest.fixture
def base_ms():
    return BASE_MS


@pytest.fixture
def clock(base_ms):
    return ManualClock(now_ns=base_ms * 1_000_000)
