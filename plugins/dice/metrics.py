"""
Anonymous usage metrics.

Sends one small report when the plugin is enabled. The report is fire and
forget: any failure is logged as a warning and otherwise ignored.
"""

import logging
import os
import platform
import uuid
from typing import Any, Dict, Optional

import httpx

from lib.plugin.host import HostBindings
from lib.plugin.metadata import PluginMetadata


class MetricsBeacon:
    """
    Usage report sender.

    Args:
        host: Source of server name, version and player count
        metadata: Plugin identity included in the report
        url: Report endpoint
        guid: Anonymous server id (random per process when not given)
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    DEFAULT_TIMEOUT = 5.0

    def __init__(
        self,
        host: HostBindings,
        metadata: PluginMetadata,
        url: str,
        guid: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.host = host
        self.metadata = metadata
        self.url = url
        self.guid = guid or str(uuid.uuid4())
        self.timeout = timeout
        self._transport = transport
        self.logger = logger or logging.getLogger(__name__)

    def payload(self) -> Dict[str, Any]:
        return {
            "guid": self.guid,
            "plugin": self.metadata.name,
            "plugin_version": self.metadata.version,
            "server": self.host.server_name,
            "server_version": self.host.server_version,
            "players_online": len(self.host.online_players()),
            "osname": platform.system(),
            "osarch": platform.machine(),
            "osversion": platform.release(),
            "cores": os.cpu_count() or 1,
            "python_version": platform.python_version(),
        }

    async def send(self) -> bool:
        """
        Post the report.

        Returns:
            True if the server accepted it, False on any failure
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=self.payload())
                response.raise_for_status()
        except (httpx.HTTPError, OSError) as e:
            self.logger.warning(f"Metrics exception: {e}")
            return False

        self.logger.info("Metrics enabled.")
        return True
