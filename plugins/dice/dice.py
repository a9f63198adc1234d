"""
Dice argument parsing and rolling logic.

This module provides:
- RollRequest: Validated (count, sides) for one invocation
- RollResult: Immutable outcome of a roll
- CommandParser: Turn /roll arguments into help, reload, a roll or a rejection
- RollEngine: Execute rolls with a shared, lock-guarded RNG
"""

import random
import re
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from lib.plugin.host import CommandSender

from .config import DiceSettings
from .permissions import can_reload, can_roll_any_dice, can_roll_multiple

TOO_MANY_DICE = "&cYou can't roll that many dice at once"
TOO_MANY_SIDES = "&cYou can't roll dice with that many sides"


@dataclass(frozen=True)
class RollRequest:
    """
    A validated roll, created per invocation.

    Attributes:
        requester: Name of the sender who asked for the roll
        count: Number of dice (>= 1)
        sides: Sides per die (>= 2)
    """
    requester: str
    count: int
    sides: int


@dataclass(frozen=True)
class RollResult:
    """
    Result of a dice roll.

    Attributes:
        rolls: Individual die results, in roll order
        sides: Number of sides per die
    """
    rolls: Tuple[int, ...]
    sides: int

    @property
    def count(self) -> int:
        return len(self.rolls)

    @property
    def total(self) -> int:
        return sum(self.rolls)


class CommandAction(Enum):
    HELP = "help"
    RELOAD = "reload"
    ROLL = "roll"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ParsedCommand:
    """
    Outcome of parsing /roll arguments.

    Attributes:
        action: What the handler should do
        request: The roll to perform (ROLL only)
        error: Message for the sender (REJECTED only)
    """
    action: CommandAction
    request: Optional[RollRequest] = None
    error: Optional[str] = None


class CommandParser:
    """
    Parse /roll arguments.

    Usage: "/roll <help|?|reload>" shows help or reloads the configuration.
    Usage: "/roll [count] [d<sides>]" where the order of the arguments does
    not matter, but the number of sides must be prefixed with 'd'.

    Count and sides can only be overridden by senders holding the matching
    permission; anyone else always rolls the configured defaults. Tokens
    that mean nothing are ignored.
    """

    COUNT_PATTERN = re.compile(r"[0-9]+")
    SIDES_PATTERN = re.compile(r"d([0-9]+)")

    def parse(
        self,
        sender: CommandSender,
        args: Sequence[str],
        settings: DiceSettings,
    ) -> ParsedCommand:
        if len(args) == 1:
            word = args[0].lower()
            if word in ("help", "?"):
                return ParsedCommand(CommandAction.HELP)
            if word == "reload" and can_reload(sender):
                return ParsedCommand(CommandAction.RELOAD)

        count: Optional[int] = settings.default_count
        sides: Optional[int] = settings.default_sides

        if args and can_roll_multiple(sender):
            token = self._first_match(self.COUNT_PATTERN, args)
            if token is not None:
                count = _to_int(token)

        if args and can_roll_any_dice(sender):
            token = self._first_match(self.SIDES_PATTERN, args)
            if token is not None:
                sides = _to_int(token)

        # None means the digits were too long to convert: over any maximum
        if count is None or count > settings.maximum_count:
            return ParsedCommand(CommandAction.REJECTED, error=TOO_MANY_DICE)
        if sides is None or sides > settings.maximum_sides:
            return ParsedCommand(CommandAction.REJECTED, error=TOO_MANY_SIDES)

        request = RollRequest(
            requester=sender.name,
            count=max(1, count),
            sides=max(2, sides),
        )
        return ParsedCommand(CommandAction.ROLL, request=request)

    @staticmethod
    def _first_match(pattern: "re.Pattern[str]", args: Sequence[str]) -> Optional[str]:
        """Digits of the first argument that fully matches pattern."""
        for arg in args:
            match = pattern.fullmatch(arg)
            if match:
                return match.group(match.lastindex or 0)
        return None


def _to_int(digits: str) -> Optional[int]:
    try:
        return int(digits)
    except ValueError:
        # Exceeds the interpreter's int conversion digit limit
        return None


class DiceRollError(ValueError):
    """Roll parameters outside what a die can be."""


class RollEngine:
    """
    Execute dice rolls.

    One engine is shared by every invocation; the RNG is guarded by a lock
    so concurrent commands cannot interleave inside it.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random number generator (defaults to a new random.Random)
        """
        self.rng = rng or random.Random()
        self._lock = threading.Lock()

    def roll(self, count: int, sides: int) -> RollResult:
        """
        Roll count dice with the given number of sides.

        Raises:
            DiceRollError: If count < 1 or sides < 2
        """
        if count < 1:
            raise DiceRollError("Must roll at least 1 die")
        if sides < 2:
            raise DiceRollError("Dice must have at least 2 sides")

        with self._lock:
            rolls: List[int] = [self.rng.randint(1, sides) for _ in range(count)]
        return RollResult(rolls=tuple(rolls), sides=sides)

    def roll_request(self, request: RollRequest) -> RollResult:
        return self.roll(request.count, request.sides)
