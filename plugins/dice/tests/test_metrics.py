"""
Unit tests for the metrics report.
"""

import json
import logging

import httpx
import pytest

from lib.host.memory import MemoryHost
from lib.plugin.host import Location

from plugins.dice.metrics import MetricsBeacon
from plugins.dice.plugin import METADATA

URL = "https://metrics.test/plugin/Dice"


@pytest.fixture
def beacon_host(tmp_path):
    host = MemoryHost(data_root=tmp_path)
    host.add_player("Alice", Location("world", 0, 64, 0))
    host.add_player("Bob", Location("world", 5, 64, 0))
    return host


def make_beacon(host, transport, guid="test-guid"):
    return MetricsBeacon(
        host=host,
        metadata=METADATA,
        url=URL,
        guid=guid,
        transport=transport,
        logger=logging.getLogger("plugin.dice.metrics"),
    )


class TestPayload:

    def test_fields(self, beacon_host, mock_transport):
        payload = make_beacon(beacon_host, mock_transport).payload()
        assert payload["guid"] == "test-guid"
        assert payload["plugin"] == "dice"
        assert payload["plugin_version"] == "1.0.0"
        assert payload["server"] == "MemoryHost"
        assert payload["players_online"] == 2
        assert payload["cores"] >= 1
        assert {"osname", "osarch", "osversion", "python_version"} <= set(payload)

    def test_guid_generated_when_missing(self, beacon_host, mock_transport):
        first = make_beacon(beacon_host, mock_transport, guid=None)
        second = make_beacon(beacon_host, mock_transport, guid=None)
        assert first.guid
        assert first.guid != second.guid


class TestSend:

    @pytest.mark.asyncio
    async def test_success(self, beacon_host, mock_transport, caplog):
        beacon = make_beacon(beacon_host, mock_transport)
        with caplog.at_level(logging.INFO, logger="plugin.dice.metrics"):
            assert await beacon.send() is True

        (request,) = mock_transport.requests
        assert request.method == "POST"
        assert str(request.url) == URL
        assert json.loads(request.content) == beacon.payload()
        assert "Metrics enabled." in caplog.text

    @pytest.mark.asyncio
    async def test_server_error(self, beacon_host, caplog):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        beacon = make_beacon(beacon_host, transport)
        with caplog.at_level(logging.WARNING, logger="plugin.dice.metrics"):
            assert await beacon.send() is False
        assert "Metrics exception:" in caplog.text

    @pytest.mark.asyncio
    async def test_connection_error(self, beacon_host, caplog):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        beacon = make_beacon(beacon_host, httpx.MockTransport(refuse))
        with caplog.at_level(logging.WARNING, logger="plugin.dice.metrics"):
            assert await beacon.send() is False
        assert "Metrics exception: connection refused" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout(self, beacon_host, caplog):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        beacon = make_beacon(beacon_host, httpx.MockTransport(slow))
        with caplog.at_level(logging.WARNING, logger="plugin.dice.metrics"):
            assert await beacon.send() is False
        assert "timed out" in caplog.text
