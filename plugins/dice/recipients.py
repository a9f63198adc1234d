"""
Broadcast recipient selection.
"""

from typing import Iterable, List

from lib.plugin.host import CommandSender, Player

from .config import DiceSettings
from .permissions import can_broadcast


class RecipientSelector:
    """
    Decide who sees a roll.

    Senders without broadcast permission only see their own rolls. A
    broadcast reaches every online player in the sender's world (or every
    world when crossworld is on) and, when a range is configured, only
    those strictly closer than range blocks. Rolls by non-players such as
    the console are not limited by world or distance.
    """

    def select(
        self,
        sender: CommandSender,
        players: Iterable[Player],
        settings: DiceSettings,
    ) -> List[CommandSender]:
        if not can_broadcast(sender):
            return [sender]
        return [p for p in players if self.in_reach(sender, p, settings)]

    @staticmethod
    def in_reach(sender: CommandSender, recipient: Player, settings: DiceSettings) -> bool:
        if not isinstance(sender, Player):
            return True

        if not settings.crossworld and sender.world != recipient.world:
            return False

        if settings.broadcast_range < 0:
            return True

        limit = settings.broadcast_range * settings.broadcast_range
        return sender.location.block_distance_squared(recipient.location) < limit
