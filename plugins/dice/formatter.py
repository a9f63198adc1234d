"""
Roll message and help text formatting.
"""

import re
from typing import Callable, Dict, Optional

from lib.plugin.host import CommandSender, translate_alternate_color_codes

from .config import DiceSettings
from .dice import RollResult
from .permissions import can_broadcast, can_roll_any_dice, can_roll_multiple

PLACEHOLDER_PATTERN = re.compile(r"\{(PLAYER|RESULT|COUNT|SIDES|TOTAL)\}")

# Indexed by (roll multiple) + 2 * (roll any dice)
USAGE = (
    "&cUsage: /roll",
    "&cUsage: /roll [count]",
    "&cUsage: /roll [d<sides>]",
    "&cUsage: /roll [count] [d<sides>]",
)


class MessageFormatter:
    """
    Build the text sent for a roll.

    Args:
        styler: Applied to finished text; translates '&' color codes by
            default. Pass lib.plugin.host.plain_text to leave them alone.
    """

    def __init__(self, styler: Optional[Callable[[str], str]] = None):
        self.styler = styler or translate_alternate_color_codes

    def format_roll(
        self,
        sender: CommandSender,
        result: RollResult,
        settings: DiceSettings,
    ) -> Optional[str]:
        """
        Fill in the broadcast or private template for a roll.

        Placeholders: {PLAYER}, {RESULT}, {COUNT}, {SIDES}, {TOTAL}.
        Substitution is a single pass, so text inserted for one placeholder
        is never expanded again.

        Returns:
            The styled message, or None when the template is empty
            (the roll is then not announced at all)
        """
        if can_broadcast(sender):
            template = settings.broadcast_message
        else:
            template = settings.private_message
        if not template:
            return None

        values: Dict[str, str] = {
            "PLAYER": sender.name,
            "RESULT": ", ".join(str(r) for r in result.rolls),
            "COUNT": str(result.count),
            "SIDES": str(result.sides),
            "TOTAL": str(result.total),
        }
        text = PLACEHOLDER_PATTERN.sub(lambda m: values[m.group(1)], template)
        return self.styler(text)

    def help_text(self, sender: CommandSender) -> str:
        """Usage line listing only the arguments this sender may use."""
        index = int(can_roll_multiple(sender)) + 2 * int(can_roll_any_dice(sender))
        return self.styler(USAGE[index])

    def style(self, text: str) -> str:
        return self.styler(text)
