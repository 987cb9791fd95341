"""
Pytest Configuration for T4DSense Tests.

Provides shared fixtures and keeps cached settings isolated between tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# Configure pytest markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "property: mark test as hypothesis property test"
    )


@pytest.fixture(autouse=True, scope="function")
def auto_reset_settings(monkeypatch, tmp_path):
    """
    Give every test fresh default settings.

    Runs from an empty directory so no stray t4dsense.yaml or .env is picked
    up, and clears the settings cache before and after.
    """
    from t4dsense.core.config import reset_settings

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("T4DSENSE_CONFIG_FILE", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def votes_for():
    """Build unit bit votes for a set of bits."""
    def _votes(bits, weight=1.0):
        return {b: weight for b in bits}
    return _votes
