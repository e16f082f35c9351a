"""Shared fixtures for the dev ticker tests."""
import json

import pytest

from ticker.config import Settings
from ticker.services.catalog import load_catalog


class ScriptedRandom:
    """Random source that replays scripted values, for forcing fault decisions."""

    def __init__(self, randrange_values=(), uniform_values=()):
        self.randrange_values = list(randrange_values)
        self.uniform_values = list(uniform_values)

    def randrange(self, *args):
        return self.randrange_values.pop(0)

    def uniform(self, a, b):
        return self.uniform_values.pop(0)


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


CATALOG_ROWS = [
    {"address": "0x0000000000000000000000000000000000000000", "decimals": 18, "symbol": "ETH"},
    {"address": "0xAbC0000000000000000000000000000000000001", "decimals": 8, "symbol": "wBTC"},
    {"address": "0xAbC0000000000000000000000000000000000002", "decimals": 18, "symbol": "BAT"},
    {"address": "0xAbC0000000000000000000000000000000000003", "decimals": 18, "symbol": "DAI"},
    {"address": "0xAbC0000000000000000000000000000000000004", "decimals": 18, "symbol": "MLTT"},
]


@pytest.fixture
def catalog_file(tmp_path):
    """Write a small token catalog and return its path."""
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(CATALOG_ROWS))
    return path


@pytest.fixture
def catalog(catalog_file):
    return load_catalog(catalog_file)


@pytest.fixture
def settings(catalog_file):
    return Settings(tokens_path=str(catalog_file), sloppy=False)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom
