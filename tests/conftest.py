"""Shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from phonopass.entropy import RandomSource, SeededRandom
from phonopass.settings import load_app_config
from phonopass.wordlists import load_wordlist


class ScriptedRandom(RandomSource):
    """Returns queued integers and records every bound it was asked for."""

    def __init__(self, values=()):
        self.values = list(values)
        self.bounds = []

    def next_uniform(self) -> float:
        self.bounds.append(None)
        return 0.0

    def randbelow(self, n: int) -> int:
        self.bounds.append(n)
        value = self.values.pop(0) if self.values else 0
        assert 0 <= value < n
        return value


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def seeded():
    return SeededRandom(1234)


@pytest.fixture
def english():
    return load_wordlist('english')


@pytest.fixture(autouse=True)
def fresh_config():
    """Settings are cached per process; tests that swap config files need a clean slate."""
    load_app_config.cache_clear()
    yield
    load_app_config.cache_clear()
