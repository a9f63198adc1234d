"""
Configuration accessor for the Dice plugin.

Every setting has a hardcoded default, used when the key is missing or holds
a value of the wrong type.
"""

from dataclasses import dataclass
from typing import Optional

from lib.plugin.config import ConfigSnapshot, ConfigStore

DEFAULT_BROADCAST_MESSAGE = "&c[&fDice&c] &f{PLAYER} rolled {RESULT} &7({COUNT}d{SIDES})"
DEFAULT_PRIVATE_MESSAGE = "&4[&fDice&4] &fYou rolled {RESULT} &7({COUNT}d{SIDES})"
DEFAULT_METRICS_URL = "https://report.mcstats.org/plugin/Dice"


@dataclass(frozen=True)
class DiceSettings:
    """
    Every Dice setting, read from a single configuration snapshot.

    A command takes one of these up front so a concurrent reload cannot
    hand it a mix of old and new values.
    """
    broadcast_message: str = DEFAULT_BROADCAST_MESSAGE
    private_message: str = DEFAULT_PRIVATE_MESSAGE
    broadcast_range: int = -1
    crossworld: bool = False
    default_count: int = 1
    default_sides: int = 6
    maximum_count: int = 6
    maximum_sides: int = 20
    logging: bool = False

    @classmethod
    def from_snapshot(cls, snapshot: ConfigSnapshot) -> "DiceSettings":
        return cls(
            broadcast_message=snapshot.get_string("message.broadcast", DEFAULT_BROADCAST_MESSAGE),
            private_message=snapshot.get_string("message.private", DEFAULT_PRIVATE_MESSAGE),
            broadcast_range=snapshot.get_int("broadcast.range", -1),
            crossworld=snapshot.get_boolean("broadcast.crossworld", False),
            default_count=snapshot.get_int("default.count", 1),
            default_sides=snapshot.get_int("default.sides", 6),
            maximum_count=snapshot.get_int("maximum.count", 6),
            maximum_sides=snapshot.get_int("maximum.sides", 20),
            logging=snapshot.get_boolean("logging", False),
        )


class DiceConfig:
    """
    Typed getters over the plugin's configuration store.

    Properties read the store's current snapshot on every access, so they
    pick up reloads immediately. The defaults live in DiceSettings. Use
    settings() when several values must come from the same snapshot.
    """

    def __init__(self, store: ConfigStore):
        self.store = store

    def settings(self) -> DiceSettings:
        return DiceSettings.from_snapshot(self.store.snapshot)

    @property
    def broadcast_message(self) -> str:
        """
        Broadcast message template. The default looks like:
        [Dice] EasyMFnE rolled 2, 3, 6, 1, 1 (5d6)
        """
        return self.settings().broadcast_message

    @property
    def private_message(self) -> str:
        """
        Private message template. The default looks like:
        [Dice] You rolled 2, 3, 6, 1, 1 (5d6)
        """
        return self.settings().private_message

    @property
    def broadcast_range(self) -> int:
        """Broadcast radius in blocks; negative means unlimited."""
        return self.settings().broadcast_range

    @property
    def is_crossworld(self) -> bool:
        """Do dice broadcasts travel between worlds?"""
        return self.settings().crossworld

    @property
    def default_count(self) -> int:
        return self.settings().default_count

    @property
    def default_sides(self) -> int:
        return self.settings().default_sides

    @property
    def maximum_count(self) -> int:
        """Maximum number of dice that can be rolled at once."""
        return self.settings().maximum_count

    @property
    def maximum_sides(self) -> int:
        """Maximum number of sides on a die."""
        return self.settings().maximum_sides

    @property
    def is_logging(self) -> bool:
        """Are we logging all broadcast rolls?"""
        return self.settings().logging

    @property
    def metrics_enabled(self) -> bool:
        return self.store.get_boolean("metrics.enabled", True)

    @property
    def metrics_url(self) -> str:
        return self.store.get_string("metrics.url", DEFAULT_METRICS_URL)

    @property
    def metrics_guid(self) -> Optional[str]:
        guid = self.store.get_string("metrics.guid", "")
        return guid or None
