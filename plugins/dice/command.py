"""
The /roll command handler.
"""

import logging
from typing import Callable, List, Optional

from lib.plugin.errors import PluginConfigError
from lib.plugin.host import CommandSender, HostBindings

from .config import DiceConfig, DiceSettings
from .dice import CommandAction, CommandParser, RollEngine
from .formatter import MessageFormatter
from .permissions import can_broadcast
from .recipients import RecipientSelector

RELOADED = "Configuration reloaded"
RELOAD_FAILED = "&cConfiguration reload failed, previous settings kept"


class RollCommand:
    """
    Handle console and player /roll commands.

    Each invocation is one pass: parse, validate, roll, format, deliver.
    The only shared state is the configuration snapshot and the roll
    engine's RNG, so the host may dispatch commands from several threads.

    Args:
        host: Supplies the online player list
        config: Configuration accessor
        parser: Turns arguments into an action
        engine: Rolls the dice
        formatter: Builds roll, help and error text
        selector: Picks broadcast recipients
        reload: Reloads the plugin configuration (raises PluginConfigError)
        logger: Where broadcast rolls are logged when enabled
    """

    NAME = "roll"

    def __init__(
        self,
        host: HostBindings,
        config: DiceConfig,
        parser: CommandParser,
        engine: RollEngine,
        formatter: MessageFormatter,
        selector: RecipientSelector,
        reload: Callable[[], None],
        logger: Optional[logging.Logger] = None,
    ):
        self.host = host
        self.config = config
        self.parser = parser
        self.engine = engine
        self.formatter = formatter
        self.selector = selector
        self._reload = reload
        self.logger = logger or logging.getLogger(__name__)

    def on_command(self, sender: CommandSender, label: str, args: List[str]) -> bool:
        """
        Run /roll for a sender.

        Returns:
            False when the roll was refused (too many dice or sides) or a
            reload failed, True otherwise
        """
        settings = self.config.settings()
        parsed = self.parser.parse(sender, args, settings)

        if parsed.action is CommandAction.HELP:
            sender.send_message(self.formatter.help_text(sender))
            return True

        if parsed.action is CommandAction.RELOAD:
            return self._reload_config(sender)

        if parsed.action is CommandAction.REJECTED:
            sender.send_message(self.formatter.style(parsed.error or ""))
            return False

        result = self.engine.roll_request(parsed.request)
        message = self.formatter.format_roll(sender, result, settings)
        self.logger.debug(
            f"{sender.name} rolled {parsed.request.count}d{parsed.request.sides}: "
            f"{list(result.rolls)}"
        )
        if message is None:
            return True

        self._deliver(sender, message, settings)
        return True

    def _deliver(self, sender: CommandSender, message: str, settings: DiceSettings) -> None:
        # Private rolls come back from the selector as just the sender
        if settings.logging and can_broadcast(sender):
            self.logger.info(message)

        for recipient in self.selector.select(sender, self.host.online_players(), settings):
            recipient.send_message(message)

    def _reload_config(self, sender: CommandSender) -> bool:
        try:
            self._reload()
        except PluginConfigError as e:
            self.logger.error(f"Reload requested by {sender.name} failed: {e}")
            sender.send_message(self.formatter.style(RELOAD_FAILED))
            return False
        sender.send_message(RELOADED)
        return True
