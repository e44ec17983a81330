"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from slugline.config import SluglineSettings, set_settings

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (property based tests)"
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test with default settings and no user config files.

    SLUGLINE_ environment variables are cleared and the working directory
    is moved to a temporary path so that neither a developer's
    ~/.config/slugline nor a slugline.yaml in the repo leaks into tests.
    """
    import os

    for key in list(os.environ):
        if key.startswith("SLUGLINE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)

    set_settings(SluglineSettings())
    yield

    import slugline.config.settings as settings_module

    settings_module._settings = None
    settings_module._config_paths_cache = None


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding sample Fountain files."""
    return FIXTURES_DIR


@pytest.fixture
def brick_and_steel(fixtures_dir) -> Path:
    """Path to the multi-scene sample screenplay."""
    return fixtures_dir / "brick_and_steel.fountain"


@pytest.fixture
def structured_script(fixtures_dir) -> Path:
    """Path to the sample screenplay with chapters and scene groups."""
    return fixtures_dir / "structured.fountain"
