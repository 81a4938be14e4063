"""
Pytest configuration for the practice-time tests
"""

import sys
from pathlib import Path

import pytest

# Add repository root to path so we can import practice_time
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from practice_time.config import reload_timezone_settings  # noqa: E402

# Variables that change zone resolution; cleared so results do not depend
# on the machine running the tests
TIMEZONE_ENV_VARS = (
    "TZ",
    "LOCAL_TIMEZONE",
    "DEFAULT_TIMEZONE",
    "FALLBACK_TIMEZONE",
    "PROFILES_TABLE",
    "PROFILE_TIMEZONE_COLUMN",
)


@pytest.fixture(autouse=True)
def clean_timezone_env(monkeypatch):
    """Run every test against default timezone settings"""
    for name in TIMEZONE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reload_timezone_settings()
    yield
    monkeypatch.undo()
    reload_timezone_settings()
