"""Shared test fixtures."""

from pathlib import Path

import pytest

from targeting.reader import read_combatants


DATA_DIR = Path(__file__).resolve().parent.parent / 'data'


@pytest.fixture(scope='session')
def data_dir() -> Path:
    """Path to the data directory."""
    return DATA_DIR


@pytest.fixture(scope='session')
def attackers():
    """All attackers from attackers.txt."""
    return read_combatants(DATA_DIR / 'attackers.txt')


@pytest.fixture(scope='session')
def targets():
    """All targets from targets.csv."""
    return read_combatants(DATA_DIR / 'targets.csv')
