"""
Unit tests for roll message and help text formatting.
"""

import pytest

from plugins.dice import permissions
from plugins.dice.dice import RollResult
from plugins.dice.formatter import USAGE, MessageFormatter

TEMPLATE = "{PLAYER} rolled {RESULT} ({COUNT}d{SIDES}) total {TOTAL}"


@pytest.fixture
def five_d6():
    return RollResult(rolls=(2, 3, 6, 1, 1), sides=6)


class TestRollMessage:
    """Tests for template selection and substitution."""

    def test_all_placeholders(self, plain_formatter, make_settings, sender_factory, five_d6):
        settings = make_settings(private_message=TEMPLATE)
        message = plain_formatter.format_roll(sender_factory(), five_d6, settings)
        assert message == "Alice rolled 2, 3, 6, 1, 1 (5d6) total 13"

    def test_broadcast_template_for_broadcasters(
        self, plain_formatter, make_settings, sender_factory, five_d6
    ):
        settings = make_settings(broadcast_message="B {TOTAL}", private_message="P {TOTAL}")
        assert plain_formatter.format_roll(
            sender_factory(permissions.BROADCAST), five_d6, settings
        ) == "B 13"
        assert plain_formatter.format_roll(sender_factory(), five_d6, settings) == "P 13"

    def test_single_die(self, plain_formatter, make_settings, sender_factory):
        settings = make_settings(private_message="{RESULT}|{COUNT}|{TOTAL}")
        result = RollResult(rolls=(4,), sides=6)
        assert plain_formatter.format_roll(sender_factory(), result, settings) == "4|1|4"

    def test_default_templates(self, plain_formatter, settings, sender_factory, five_d6):
        assert plain_formatter.format_roll(sender_factory(), five_d6, settings) == (
            "&4[&fDice&4] &fYou rolled 2, 3, 6, 1, 1 &7(5d6)"
        )
        assert plain_formatter.format_roll(
            sender_factory(permissions.BROADCAST), five_d6, settings
        ) == "&c[&fDice&c] &fAlice rolled 2, 3, 6, 1, 1 &7(5d6)"

    def test_repeated_placeholders(self, plain_formatter, make_settings, sender_factory, five_d6):
        settings = make_settings(private_message="{SIDES}/{SIDES}")
        assert plain_formatter.format_roll(sender_factory(), five_d6, settings) == "6/6"

    def test_placeholders_are_case_sensitive(
        self, plain_formatter, make_settings, sender_factory, five_d6
    ):
        settings = make_settings(private_message="{player} {Result} {TOTAL")
        assert plain_formatter.format_roll(sender_factory(), five_d6, settings) == (
            "{player} {Result} {TOTAL"
        )

    def test_substitution_is_not_recursive(
        self, plain_formatter, make_settings, sender_factory, five_d6
    ):
        settings = make_settings(private_message="{PLAYER}: {TOTAL}")
        sender = sender_factory(name="{TOTAL}")
        assert plain_formatter.format_roll(sender, five_d6, settings) == "{TOTAL}: 13"

    def test_empty_template_means_no_message(
        self, plain_formatter, make_settings, sender_factory, five_d6
    ):
        settings = make_settings(private_message="")
        assert plain_formatter.format_roll(sender_factory(), five_d6, settings) is None

    def test_whitespace_template_is_still_a_message(
        self, plain_formatter, make_settings, sender_factory, five_d6
    ):
        settings = make_settings(private_message=" ")
        assert plain_formatter.format_roll(sender_factory(), five_d6, settings) == " "


class TestStyling:
    """Color codes are translated after substitution."""

    def test_default_styler_translates(self, make_settings, sender_factory, five_d6):
        settings = make_settings(private_message="&c{TOTAL}&r")
        formatter = MessageFormatter()
        assert formatter.format_roll(sender_factory(), five_d6, settings) == "§c13§r"

    def test_custom_styler(self, make_settings, sender_factory, five_d6):
        formatter = MessageFormatter(str.upper)
        sender = sender_factory(name="bob")
        settings = make_settings(private_message="{PLAYER} {TOTAL}")
        assert formatter.format_roll(sender, five_d6, settings) == "BOB 13"


class TestHelpText:
    """Usage line depends on roll-multiple / roll-any permissions."""

    @pytest.mark.parametrize(
        "nodes,expected",
        [
            ((), "&cUsage: /roll"),
            ((permissions.ROLL_MULTIPLE,), "&cUsage: /roll [count]"),
            ((permissions.ROLL_ANY,), "&cUsage: /roll [d<sides>]"),
            ((permissions.ROLL_MULTIPLE, permissions.ROLL_ANY), "&cUsage: /roll [count] [d<sides>]"),
        ],
    )
    def test_usage(self, plain_formatter, sender_factory, nodes, expected):
        assert plain_formatter.help_text(sender_factory(*nodes)) == expected

    def test_other_permissions_do_not_matter(self, plain_formatter, sender_factory):
        sender = sender_factory(permissions.BROADCAST, permissions.RELOAD)
        assert plain_formatter.help_text(sender) == USAGE[0]

    def test_help_is_styled(self, sender_factory):
        assert MessageFormatter().help_text(sender_factory()) == "§cUsage: /roll"
