"""
lib/plugin/host.py

Host framework bindings.

Plugins never talk to a concrete game server. Everything they need from the
host (command dispatch, permission checks, the online player list, world
positions, configuration files and logging) goes through the abstractions in
this module, so a plugin can run against a real server adapter or against
the in-memory host in ``lib.host.memory``.
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .config import ConfigStore, YamlConfigStore


# Legacy chat formatting: '&' + code -> section sign + code
SECTION_SIGN = "§"
COLOR_CODES = "0123456789AaBbCcDdEeFfKkLlMmNnOoRr"


def translate_alternate_color_codes(text: str, alt_char: str = "&") -> str:
    """
    Translate alternate color codes into the host's section-sign escapes.

    Only a recognized code character directly after ``alt_char`` is
    translated; the code is lowercased. Anything else is left untouched.

    Example:
        translate_alternate_color_codes('&cRed &Xplain')
        # -> '§cRed &Xplain'
    """
    chars = list(text)
    for i in range(len(chars) - 1):
        if chars[i] == alt_char and chars[i + 1] in COLOR_CODES:
            chars[i] = SECTION_SIGN
            chars[i + 1] = chars[i + 1].lower()
    return "".join(chars)


def plain_text(text: str) -> str:
    """Identity styler for hosts without chat formatting."""
    return text


@dataclass(frozen=True)
class Location:
    """
    Position of an entity inside a world.

    Attributes:
        world: Name of the world the position belongs to
        x, y, z: Exact coordinates
    """
    world: str
    x: float
    y: float
    z: float

    @property
    def block_x(self) -> int:
        return math.floor(self.x)

    @property
    def block_y(self) -> int:
        return math.floor(self.y)

    @property
    def block_z(self) -> int:
        return math.floor(self.z)

    def block_distance_squared(self, other: "Location") -> int:
        """Squared distance between the blocks containing both positions."""
        dx = self.block_x - other.block_x
        dy = self.block_y - other.block_y
        dz = self.block_z - other.block_z
        return dx * dx + dy * dy + dz * dz


class CommandSender(ABC):
    """Anything that can issue a command: a player, the console, a script."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name used in messages."""

    @abstractmethod
    def has_permission(self, node: str) -> bool:
        """Ask the host's permission oracle about a permission node."""

    @abstractmethod
    def send_message(self, message: str) -> None:
        """Deliver a chat message to this sender."""


class Player(CommandSender):
    """A sender that is a tracked entity with a position in a world."""

    @property
    @abstractmethod
    def location(self) -> Location:
        """Current position."""

    @property
    def world(self) -> str:
        return self.location.world


# Handler signature: (sender, label, args) -> handled successfully
CommandHandler = Callable[[CommandSender, str, List[str]], bool]


class HostBindings(ABC):
    """
    Services a host framework offers to plugins.

    Concrete hosts implement the abstract methods; the defaults cover
    logging, YAML-backed configuration and legacy color styling.
    """

    server_name: str = "unknown"
    server_version: str = "unknown"

    @abstractmethod
    def register_command(self, name: str, handler: CommandHandler) -> None:
        """
        Route a command name to a handler.

        Raises:
            CommandAlreadyRegisteredError: If the name is taken
        """

    @abstractmethod
    def unregister_command(self, name: str) -> None:
        """Release a command name. Unknown names are ignored."""

    @abstractmethod
    def online_players(self) -> List[Player]:
        """Snapshot of the currently connected players."""

    @abstractmethod
    def data_folder(self, plugin_name: str) -> Path:
        """Directory where a plugin keeps its files."""

    def get_logger(self, plugin_name: str) -> logging.Logger:
        return logging.getLogger(f"plugin.{plugin_name}")

    def config_store(
        self, plugin_name: str, defaults_path: Optional[Path] = None
    ) -> ConfigStore:
        """Persistent configuration for a plugin (config.yml in its data folder)."""
        return YamlConfigStore(
            self.data_folder(plugin_name) / "config.yml",
            defaults_path=defaults_path,
        )

    def style(self, text: str) -> str:
        """Apply host chat styling to outgoing text."""
        return translate_alternate_color_codes(text)
