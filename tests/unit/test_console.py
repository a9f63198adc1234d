"""
tests/unit/test_console.py

Tests for the interactive console runner.
"""

import pytest

from console import DiceConsole
from plugins.dice import permissions


def make_settings(tmp_path, players=()):
    return {
        'data_folder': tmp_path,
        'color': False,
        'players': list(players),
    }


@pytest.fixture
def quiet_metrics(tmp_path):
    """Pre-written plugin config with the metrics report turned off."""
    config_file = tmp_path / 'dice' / 'config.yml'
    config_file.parent.mkdir(parents=True)
    config_file.write_text('metrics:\n  enabled: false\n', encoding='utf-8')
    return config_file


class TestConsoleSetup:

    def test_console_without_players_cannot_broadcast(self, tmp_path):
        console = DiceConsole(make_settings(tmp_path))
        assert not console.console.has_permission(permissions.BROADCAST)
        assert console.console.has_permission(permissions.ROLL_ANY)
        assert console.console.has_permission(permissions.RELOAD)

    def test_players_created(self, tmp_path):
        console = DiceConsole(make_settings(tmp_path, [{
            'name': 'Alice', 'world': 'world', 'x': 1.0, 'y': 64.0, 'z': 2.0,
            'permissions': [permissions.BROADCAST],
        }]))
        (alice,) = console.host.players
        assert alice.name == 'Alice'
        assert alice.location.block_z == 2
        assert alice.has_permission(permissions.BROADCAST)
        assert console.console.has_permission(permissions.BROADCAST)


class TestHandleLine:

    @pytest.mark.asyncio
    async def test_roll_as_console(self, tmp_path, quiet_metrics, capsys):
        console = DiceConsole(make_settings(tmp_path))
        await console.start()
        try:
            assert console.handle_line('roll d20 2\n') is True
        finally:
            await console.stop()
        assert console.console.messages[0].endswith('(2d20)')
        assert 'You rolled' in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_roll_as_player(self, tmp_path, quiet_metrics, capsys):
        console = DiceConsole(make_settings(tmp_path, [
            {'name': 'Alice', 'world': 'world', 'x': 0.0, 'y': 64.0, 'z': 0.0,
             'permissions': [permissions.BROADCAST]},
            {'name': 'Bob', 'world': 'world', 'x': 3.0, 'y': 64.0, 'z': 0.0,
             'permissions': []},
        ]))
        await console.start()
        try:
            assert console.handle_line('as alice roll') is True
        finally:
            await console.stop()

        alice, bob = console.host.players
        assert len(bob.messages) == 1
        assert bob.messages == alice.messages
        assert '[to Bob]' in capsys.readouterr().out

    def test_unknown_player(self, tmp_path, capsys):
        console = DiceConsole(make_settings(tmp_path))
        assert console.handle_line('as Nobody roll') is True
        assert 'No such player: Nobody' in capsys.readouterr().out

    @pytest.mark.parametrize('line', ['stop', 'QUIT', 'exit\n'])
    def test_quit_words(self, tmp_path, line):
        assert DiceConsole(make_settings(tmp_path)).handle_line(line) is False

    def test_blank_line(self, tmp_path):
        console = DiceConsole(make_settings(tmp_path))
        assert console.handle_line('   \n') is True
        assert console.console.messages == []

    def test_unknown_command(self, tmp_path):
        console = DiceConsole(make_settings(tmp_path))
        console.handle_line('teleport home')
        assert console.console.messages == ['Unknown command: teleport']

    def test_list_players(self, tmp_path, capsys):
        console = DiceConsole(make_settings(tmp_path, [{
            'name': 'Alice', 'world': 'world', 'x': 0.0, 'y': 64.0, 'z': 0.0,
            'permissions': [],
        }]))
        console.handle_line('players')
        assert 'Alice @ world' in capsys.readouterr().out
