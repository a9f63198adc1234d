"""
In-memory host for running plugins without a game server.

Simulates the host framework: a command registry, connected players with
positions, permission grants and per-plugin configuration stores. Every
message a sender receives is recorded, which makes this host the standard
fixture for plugin tests.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import yaml

from lib.plugin.config import ConfigStore, MemoryConfigStore
from lib.plugin.errors import CommandAlreadyRegisteredError
from lib.plugin.host import (
    CommandHandler,
    CommandSender,
    HostBindings,
    Location,
    Player,
    translate_alternate_color_codes,
)

logger = logging.getLogger(__name__)


class MemorySender(CommandSender):
    """
    A non-player sender (console, command block, script).

    Args:
        name: Display name
        permissions: Granted permission nodes; '*' grants everything
    """

    def __init__(self, name: str = "CONSOLE", permissions: Iterable[str] = ("*",)):
        self._name = name
        self.permissions = set(permissions)
        self.messages: List[str] = []

    @property
    def name(self) -> str:
        return self._name

    def has_permission(self, node: str) -> bool:
        return "*" in self.permissions or node in self.permissions

    def send_message(self, message: str) -> None:
        self.messages.append(message)

    def grant(self, *nodes: str) -> None:
        self.permissions.update(nodes)

    def revoke(self, *nodes: str) -> None:
        self.permissions.difference_update(nodes)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"


class MemoryPlayer(MemorySender, Player):
    """A connected player with a position; no permissions by default."""

    def __init__(
        self,
        name: str,
        location: Location,
        permissions: Iterable[str] = (),
    ):
        super().__init__(name, permissions)
        self._location = location

    @property
    def location(self) -> Location:
        return self._location

    def teleport(self, location: Location) -> None:
        self._location = location


class MemoryHost(HostBindings):
    """
    HostBindings implementation that keeps everything in memory.

    Args:
        configs: Initial configuration per plugin name. A plugin without an
            entry starts with no config "file", so save_default() applies.
        data_root: Base directory reported by data_folder()
        styler: Outgoing text styler (defaults to legacy color translation)

    Example:
        host = MemoryHost(configs={'dice': {'maximum': {'count': 10}}})
        alice = host.add_player('Alice', Location('world', 0, 64, 0),
                                permissions=['dice.roll.multiple'])
        await DicePlugin(host).enable()
        host.dispatch(alice, 'roll 3')
        alice.messages
    """

    server_name = "MemoryHost"
    server_version = "1.0.0"

    def __init__(
        self,
        configs: Optional[Mapping[str, Mapping[str, Any]]] = None,
        data_root: Path = Path("plugins-data"),
        styler: Optional[Callable[[str], str]] = None,
    ):
        self.commands: Dict[str, CommandHandler] = {}
        self.players: List[MemoryPlayer] = []
        self.data_root = Path(data_root)
        self._styler = styler or translate_alternate_color_codes
        self._stores: Dict[str, MemoryConfigStore] = {}
        for plugin_name, data in (configs or {}).items():
            self._stores[plugin_name] = MemoryConfigStore(data)

    # -----------------------------------------------------------------
    # HostBindings
    # -----------------------------------------------------------------

    def register_command(self, name: str, handler: CommandHandler) -> None:
        key = name.lower()
        if key in self.commands:
            raise CommandAlreadyRegisteredError(name)
        self.commands[key] = handler

    def unregister_command(self, name: str) -> None:
        self.commands.pop(name.lower(), None)

    def online_players(self) -> List[Player]:
        return list(self.players)

    def data_folder(self, plugin_name: str) -> Path:
        return self.data_root / plugin_name

    def config_store(
        self, plugin_name: str, defaults_path: Optional[Path] = None
    ) -> ConfigStore:
        store = self._stores.get(plugin_name)
        if store is None:
            store = MemoryConfigStore()
            self._stores[plugin_name] = store
        if defaults_path is not None and defaults_path.exists():
            with open(defaults_path, 'r', encoding='utf-8') as fp:
                store.set_defaults(yaml.safe_load(fp) or {})
        return store

    def style(self, text: str) -> str:
        return self._styler(text)

    # -----------------------------------------------------------------
    # Simulation helpers
    # -----------------------------------------------------------------

    def add_player(
        self,
        name: str,
        location: Location,
        permissions: Iterable[str] = (),
    ) -> MemoryPlayer:
        player = MemoryPlayer(name, location, permissions)
        self.players.append(player)
        return player

    def remove_player(self, player: MemoryPlayer) -> None:
        self.players.remove(player)

    def store_for(self, plugin_name: str) -> MemoryConfigStore:
        """The backing config store of a plugin, created on first use."""
        store = self.config_store(plugin_name)
        if not isinstance(store, MemoryConfigStore):
            raise TypeError(
                f"{plugin_name} config is a {type(store).__name__}, not a MemoryConfigStore"
            )
        return store

    def dispatch(self, sender: CommandSender, line: str) -> bool:
        """
        Run a command line as the host would: first word selects the command.

        Unknown commands are reported to the sender and return False.
        """
        parts = line.strip().split()
        if not parts:
            return False
        label, args = parts[0].lstrip('/'), parts[1:]
        handler = self.commands.get(label.lower())
        if handler is None:
            sender.send_message(f"Unknown command: {label}")
            return False
        logger.debug(f"{sender.name} issued command: {line.strip()}")
        return handler(sender, label, args)
