#!/usr/bin/env python3
"""
Dice console - run the Dice plugin from a terminal.

Starts an in-process console host, enables the Dice plugin against it and
reads commands from stdin:

    roll 2 d20            run a command as the console
    as Alice roll 3       run a command as a simulated player
    players               list simulated players
    stop                  disable the plugin and exit

Simulated players and logging come from an optional JSON or YAML settings
file (see common.config.get_config). Plugin configuration is written to
<data_folder>/dice/config.yml on first start.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from common.config import configure_logger, get_config
from lib.host.console import ConsoleHost, ConsoleSender
from lib.plugin.host import Location
from plugins.dice import DicePlugin
from plugins.dice import permissions

logger = logging.getLogger(__name__)

QUIT_WORDS = ("stop", "quit", "exit")


class DiceConsole:
    """
    Console orchestrator.

    Responsibilities:
    1. Build the host and its simulated players
    2. Enable the plugin, feed it commands, disable it on exit
    """

    def __init__(self, settings: dict):
        self.settings = settings
        self.host = ConsoleHost(settings['data_folder'], color=settings['color'])
        self.console = ConsoleSender()
        for entry in settings['players']:
            self.host.add_console_player(
                entry['name'],
                Location(entry['world'], entry['x'], entry['y'], entry['z']),
                entry['permissions'],
            )
        if not self.host.players:
            # Nobody would see a console broadcast
            self.console.revoke("*")
            self.console.grant(
                permissions.RELOAD, permissions.ROLL_ANY, permissions.ROLL_MULTIPLE
            )
        self.plugin = DicePlugin(self.host)

    async def start(self):
        await self.plugin.enable()

    async def stop(self):
        await self.plugin.disable()

    def handle_line(self, line: str) -> bool:
        """Run one input line. Returns False when the console should exit."""
        words = line.split()
        if not words:
            return True
        if words[0].lower() in QUIT_WORDS:
            return False
        if words[0].lower() == 'players':
            for player in self.host.players:
                loc = player.location
                print(f"{player.name} @ {loc.world} ({loc.x}, {loc.y}, {loc.z}) "
                      f"{sorted(player.permissions)}")
            return True
        if words[0].lower() == 'as' and len(words) >= 3:
            player = next(
                (p for p in self.host.players if p.name.lower() == words[1].lower()),
                None,
            )
            if player is None:
                print(f"No such player: {words[1]}")
                return True
            self.host.dispatch(player, ' '.join(words[2:]))
            return True
        self.host.dispatch(self.console, line)
        return True

    async def run(self):
        loop = asyncio.get_running_loop()
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            if not self.handle_line(line):
                break


async def main():
    """Entry point"""
    parser = argparse.ArgumentParser(description="Run the Dice plugin in a console host")
    parser.add_argument('config', nargs='?', help="JSON or YAML settings file")
    args = parser.parse_args()

    try:
        settings = get_config(args.config)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logger(
        log_file=settings['log_file'],
        log_format=settings['log_format'],
        log_level=settings['log_level'],
    )

    console = DiceConsole(settings)
    await console.start()
    try:
        await console.run()
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await console.stop()


def cli():
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
