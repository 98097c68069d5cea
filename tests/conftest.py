"""Shared pytest configuration and fixtures for the timephase test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from timephase.core.clock_service import ClockService  # noqa: E402
from timephase.core.config_service import config  # noqa: E402
from timephase.core.logging_service import get_logger  # noqa: E402


ENV_VARS = (
    'TIMEPHASE_CONFIG',
    'TIMEPHASE_INTERVAL',
    'TIMEPHASE_THRESHOLD',
    'TIMEPHASE_OFFSET',
    'TIMEZONE',
    'LOG_LEVEL',
)

# 2020-09-13 12:27:07 UTC, second 7 of its minute
EPOCH_SECONDS = 1_600_000_027


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's config files and environment out of every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.chdir(tmp_path)
    config.reload()
    yield config
    config.reload()


@pytest.fixture
def utc_clock() -> ClockService:
    return ClockService('UTC')


@pytest.fixture
def logger():
    return get_logger()


class FakeClock:
    """Epoch nanosecond source advanced by the fake sleep."""

    def __init__(self, now_ns: int):
        self.now_ns = now_ns
        self.sleeps = []

    def __call__(self) -> int:
        return self.now_ns

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now_ns += round(seconds * 1_000_000_000)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(EPOCH_SECONDS * 1_000_000_000 + 123_400_000)
