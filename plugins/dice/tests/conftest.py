"""Pytest configuration and fixtures for Dice plugin tests."""

import dataclasses
import random

import httpx
import pytest
import pytest_asyncio

from lib.host.memory import MemoryHost, MemorySender
from lib.plugin.host import Location, plain_text

from plugins.dice.config import DiceSettings
from plugins.dice.dice import CommandParser, RollEngine
from plugins.dice.formatter import MessageFormatter
from plugins.dice.plugin import DicePlugin


@pytest.fixture
def settings() -> DiceSettings:
    """Settings with every default in place."""
    return DiceSettings()


@pytest.fixture
def make_settings():
    """Factory for DiceSettings with selected fields overridden."""
    def _make(**overrides) -> DiceSettings:
        return dataclasses.replace(DiceSettings(), **overrides)
    return _make


@pytest.fixture
def parser() -> CommandParser:
    return CommandParser()


@pytest.fixture
def seeded_engine() -> RollEngine:
    """RollEngine with seeded RNG for deterministic tests."""
    return RollEngine(rng=random.Random(42))


@pytest.fixture
def plain_formatter() -> MessageFormatter:
    """Formatter that leaves '&' codes untouched."""
    return MessageFormatter(plain_text)


@pytest.fixture
def sender_factory():
    """Factory for non-player senders with the given permissions."""
    def _make(*nodes: str, name: str = "Alice") -> MemorySender:
        return MemorySender(name, permissions=nodes)
    return _make


@pytest.fixture
def dice_config():
    """Plugin configuration used by the host fixture (metrics off)."""
    return {
        "metrics": {"enabled": False},
    }


@pytest.fixture
def host(tmp_path, dice_config) -> MemoryHost:
    """MemoryHost with plain styling and Dice config preloaded."""
    return MemoryHost(
        configs={"dice": dice_config},
        data_root=tmp_path,
        styler=plain_text,
    )


@pytest_asyncio.fixture
async def plugin(host):
    """Enabled DicePlugin on the host; disabled after the test."""
    dice = DicePlugin(host, rng=random.Random(1234))
    await dice.enable()
    yield dice
    await dice.disable()


@pytest.fixture
def origin() -> Location:
    return Location("world", 0.0, 64.0, 0.0)


@pytest.fixture
def mock_transport():
    """httpx transport that records requests and answers 200."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"ok": True})

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport
