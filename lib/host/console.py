"""
Interactive console host.

Runs plugins in-process with the operator as the console sender. Plugin
configuration lives in real YAML files under the data directory, so edits
followed by a reload behave as they would on a server. Simulated players
are optional and exist so broadcasts have somebody to reach.
"""

import re
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from lib.plugin.config import ConfigStore, YamlConfigStore

from .memory import MemoryHost, MemoryPlayer, MemorySender

# Legacy color/format code -> ANSI SGR parameter
ANSI_CODES = {
    '0': '30', '1': '34', '2': '32', '3': '36',
    '4': '31', '5': '35', '6': '33', '7': '37',
    '8': '90', '9': '94', 'a': '92', 'b': '96',
    'c': '91', 'd': '95', 'e': '93', 'f': '97',
    'k': '5', 'l': '1', 'm': '9', 'n': '4', 'o': '3', 'r': '0',
}

_CODE_PATTERN = re.compile(r'&([0-9a-fk-or])', re.IGNORECASE)


def ansi_text(text: str) -> str:
    """Render '&' color codes as ANSI escapes, resetting at the end."""
    if not _CODE_PATTERN.search(text):
        return text
    styled = _CODE_PATTERN.sub(
        lambda m: f"\x1b[{ANSI_CODES[m.group(1).lower()]}m", text
    )
    return f"{styled}\x1b[0m"


def strip_codes(text: str) -> str:
    return _CODE_PATTERN.sub('', text)


class ConsoleSender(MemorySender):
    """The operator: holds every permission and prints what it receives."""

    def __init__(self, out: Optional[TextIO] = None):
        super().__init__("CONSOLE", permissions=("*",))
        self.out = out

    def send_message(self, message: str) -> None:
        super().send_message(message)
        print(message, file=self.out or sys.stdout)


class ConsolePlayer(MemoryPlayer):
    """Simulated player whose messages are echoed with a name prefix."""

    def __init__(self, *args, out: Optional[TextIO] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.out = out

    def send_message(self, message: str) -> None:
        super().send_message(message)
        print(f"[to {self.name}] {message}", file=self.out or sys.stdout)


class ConsoleHost(MemoryHost):
    """
    MemoryHost with YAML configuration files and terminal styling.

    Args:
        data_root: Directory holding one sub-directory per plugin
        color: Render color codes as ANSI (True) or strip them (False)
    """

    server_name = "Console"

    def __init__(
        self,
        data_root: Path,
        color: bool = True,
        styler: Optional[Callable[[str], str]] = None,
    ):
        super().__init__(
            data_root=data_root,
            styler=styler or (ansi_text if color else strip_codes),
        )

    def config_store(
        self, plugin_name: str, defaults_path: Optional[Path] = None
    ) -> ConfigStore:
        return YamlConfigStore(
            self.data_folder(plugin_name) / "config.yml",
            defaults_path=defaults_path,
            logger=self.get_logger(plugin_name),
        )

    def add_console_player(self, name, location, permissions=(), out: Optional[TextIO] = None):
        player = ConsolePlayer(name, location, permissions, out=out)
        self.players.append(player)
        return player


__all__ = [
    "ConsoleHost",
    "ConsolePlayer",
    "ConsoleSender",
    "ansi_text",
    "strip_codes",
]
