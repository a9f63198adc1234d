"""
Dice Plugin

Roll virtual dice on a game server.

Commands:
    /roll [count] [d<sides>] - Roll dice (options depend on permissions)
    /roll help               - Show usage
    /roll reload             - Reload configuration

Example usage:
    /roll          -> [Dice] You rolled 4 (1d6)
    /roll 3 d20    -> [Dice] Alice rolled 17, 2, 9 (3d20)
"""

from .command import RollCommand
from .config import DiceConfig, DiceSettings
from .dice import (
    CommandAction,
    CommandParser,
    DiceRollError,
    ParsedCommand,
    RollEngine,
    RollRequest,
    RollResult,
)
from .formatter import MessageFormatter
from .metrics import MetricsBeacon
from .plugin import METADATA, DicePlugin
from .recipients import RecipientSelector

__all__ = [
    "DicePlugin",
    "METADATA",
    "RollCommand",
    "DiceConfig",
    "DiceSettings",
    "CommandAction",
    "CommandParser",
    "DiceRollError",
    "ParsedCommand",
    "RollEngine",
    "RollRequest",
    "RollResult",
    "MessageFormatter",
    "MetricsBeacon",
    "RecipientSelector",
]
__version__ = "1.0.0"
