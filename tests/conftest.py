"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROBLEMS_DIR = FIXTURES_DIR / "problems"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def problems_dir() -> Path:
    """Return path to problem fixtures directory."""
    return PROBLEMS_DIR
