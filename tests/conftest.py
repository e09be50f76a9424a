"""Shared fixtures for the storediter test suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storediter import CursorConfig, CursorDict


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running scale tests")


@pytest.fixture
def abc():
    """Container with entries {a: 1, b: 2, c: 3} in that order."""
    return CursorDict(a=1, b=2, c=3)


@pytest.fixture
def empty():
    """Container with no entries."""
    return CursorDict()


@pytest.fixture
def strict_abc():
    """Same entries as ``abc`` with every contract check on."""
    return CursorDict(a=1, b=2, c=3, config=CursorConfig.strict())


@pytest.fixture
def drain():
    """Function that takes native steps until exhaustion and returns the pairs seen."""
    return _drain


def _drain(container):
    pairs = []
    pair = container.each()
    while pair is not None:
        pairs.append(pair)
        pair = container.each()
    return pairs
