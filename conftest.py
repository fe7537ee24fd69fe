"""Pytest configuration — ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _isolated_default_flags(monkeypatch):
    """Keep ROMAN_DEFAULT_FLAGS from the environment out of the tests."""
    from roman_validator import config

    monkeypatch.delenv(config.DEFAULT_FLAGS_ENV_VAR, raising=False)
    config.reset_defaults()
    yield
    config.reset_defaults()
