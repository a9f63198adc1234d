"""
Dice Plugin

Lets players roll virtual dice with /roll. What a player may roll, and who
gets to see it, depends on their permissions and the plugin configuration.

Commands:
    /roll                 - Roll the default dice
    /roll [count] [d<n>]  - Roll count dice with n sides (permission-gated)
    /roll help|?          - Show usage for your permissions
    /roll reload          - Reload config.yml (dice.reload)

Permissions:
    dice.roll.broadcast - Rolls are broadcast instead of private
    dice.roll.multiple  - May choose the number of dice
    dice.roll.any       - May choose the number of sides
    dice.reload         - May reload the configuration
"""

import asyncio
import random
from pathlib import Path
from typing import Optional

import httpx

from lib.plugin import Plugin, PluginMetadata
from lib.plugin.host import HostBindings

from . import permissions
from .command import RollCommand
from .config import DiceConfig
from .dice import CommandParser, RollEngine
from .formatter import MessageFormatter
from .metrics import MetricsBeacon
from .recipients import RecipientSelector

METADATA = PluginMetadata(
    name="dice",
    display_name="Dice",
    version="1.0.0",
    description="Roll dice, privately or for everyone nearby",
    author="EasyMFnE",
    commands={RollCommand.NAME: "/roll [count] [d<sides>]"},
    permissions={
        permissions.BROADCAST: "Broadcast roll results to other players",
        permissions.RELOAD: "Reload the Dice configuration",
        permissions.ROLL_ANY: "Roll dice with any number of sides",
        permissions.ROLL_MULTIPLE: "Roll more than one die at once",
    },
)


class DicePlugin(Plugin):
    """
    Composition root for the Dice plugin.

    enable() loads config.yml (writing the bundled default first if there
    is none), builds the command pipeline, registers /roll and starts the
    metrics report in the background. disable() releases all of it.

    Args:
        host: Host bindings
        rng: Random source for the roll engine (tests pass a seeded one)
        metrics_transport: httpx transport for the metrics report
    """

    def __init__(
        self,
        host: HostBindings,
        rng: Optional[random.Random] = None,
        metrics_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(host)
        self._rng = rng
        self._metrics_transport = metrics_transport
        self.config: Optional[DiceConfig] = None
        self.roll_command: Optional[RollCommand] = None
        self._metrics_task: Optional["asyncio.Task[bool]"] = None

    @property
    def metadata(self) -> PluginMetadata:
        return METADATA

    @property
    def defaults_path(self) -> Optional[Path]:
        return Path(__file__).parent / "config.yml"

    async def setup(self) -> None:
        self.config = DiceConfig(self.config_store)
        self.roll_command = RollCommand(
            host=self.host,
            config=self.config,
            parser=CommandParser(),
            engine=RollEngine(self._rng),
            formatter=MessageFormatter(self.host.style),
            selector=RecipientSelector(),
            reload=self.reload,
            logger=self.logger,
        )
        self.register_command(RollCommand.NAME, self.roll_command.on_command)
        self._start_metrics()

    async def teardown(self) -> None:
        task, self._metrics_task = self._metrics_task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.roll_command = None
        self.config = None

    def _start_metrics(self) -> None:
        if not self.config.metrics_enabled:
            self.logger.info("Metrics disabled.")
            return

        beacon = MetricsBeacon(
            host=self.host,
            metadata=self.metadata,
            url=self.config.metrics_url,
            guid=self.config.metrics_guid,
            transport=self._metrics_transport,
            logger=self.logger,
        )
        self._metrics_task = asyncio.get_running_loop().create_task(beacon.send())
