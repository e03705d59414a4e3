"""Shared pytest setup for the HOA Scout test suite.

`tests/unit` runs without a database; `tests/integration` uses temporary
SQLite files through aiosqlite. Set RUN_SLOW=1 to include slow tests.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from hoa_scout_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that exercise a real database or HTTP stack",
    )
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second (auto-skipped)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless RUN_SLOW is set."""
    if os.environ.get("RUN_SLOW", "").lower() in ("1", "true", "yes"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test - run with RUN_SLOW=1")
    for item in items:
        if "slow" in {mark.name for mark in item.iter_markers()}:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings for every test so env overrides never leak."""
    clear_settings_cache()
    yield
    clear_settings_cache()
