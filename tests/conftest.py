"""Shared fixtures for the unit tests."""

from pathlib import Path

import pytest

from pupdoc.config import RuntimeSettings, Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_content():
    """Read a manifest from the fixtures directory."""
    def _read(name: str) -> str:
        return (FIXTURES_DIR / name).read_text()
    return _read


@pytest.fixture
def settings():
    """Extractor settings independent of the environment."""
    return Settings(log_level="DEBUG", minimum_plan_version="5.0.0", plans_path_pattern=r"^plans/", max_blank_lines=1)


@pytest.fixture
def runtime():
    """A current runtime that supports plans and tasks."""
    return RuntimeSettings(version="6.4.0", supported_settings=["tasks"])


@pytest.fixture
def old_runtime():
    """A runtime too old for plans."""
    return RuntimeSettings(version="4.10.0", supported_settings=["tasks"])
