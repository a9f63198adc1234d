"""
Permission predicates for the Dice plugin.

Each check asks the host's permission oracle on every call; nothing is cached.
"""

from lib.plugin.host import CommandSender

BROADCAST = "dice.roll.broadcast"
RELOAD = "dice.reload"
ROLL_ANY = "dice.roll.any"
ROLL_MULTIPLE = "dice.roll.multiple"


def can_broadcast(sender: CommandSender) -> bool:
    """Are the user's rolls shown to other players?"""
    return sender.has_permission(BROADCAST)


def can_reload(sender: CommandSender) -> bool:
    """Is the user allowed to reload the plugin's configuration?"""
    return sender.has_permission(RELOAD)


def can_roll_any_dice(sender: CommandSender) -> bool:
    """Can the user roll dice with any number of sides?"""
    return sender.has_permission(ROLL_ANY)


def can_roll_multiple(sender: CommandSender) -> bool:
    """Can the user roll multiple dice at once?"""
    return sender.has_permission(ROLL_MULTIPLE)
