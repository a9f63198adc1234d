"""
lib/plugin/base.py

Abstract plugin base class.
"""

import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .config import ConfigStore
from .errors import PluginConfigError, PluginSetupError, PluginStateError
from .host import CommandHandler, HostBindings
from .metadata import PluginMetadata


class Plugin(ABC):
    """
    Abstract base class for host plugins.

    Lifecycle:
        1. __init__() - Construct plugin (fast, no I/O)
        2. enable()   - Load config, then setup()
        3. [plugin runs, handles commands]
        4. reload()   - Re-read config, then on_reload()
        5. disable()  - teardown(), then release commands

    Every lifecycle step is logged with its duration:
        === ENABLE START ===
        === ENABLE COMPLETE (3ms) ===

    Attributes:
        host: Host bindings (commands, players, config, logging)
        logger: Logger instance for this plugin
        config_store: Persistent configuration (available after enable())
        is_enabled: Whether plugin is currently enabled

    Example:
        class MyPlugin(Plugin):
            @property
            def metadata(self):
                return PluginMetadata(
                    name='my_plugin',
                    display_name='My Plugin',
                    version='1.0.0',
                    description='Does something cool',
                    author='Me'
                )

            async def setup(self):
                self.register_command('hello', self.hello)

            def hello(self, sender, label, args):
                sender.send_message(f'Hello {sender.name}!')
                return True
    """

    def __init__(self, host: HostBindings):
        """
        Initialize plugin.

        IMPORTANT: This should be fast (no I/O, no blocking operations).
        Do heavy initialization in setup().
        """
        self.host = host
        self.logger = host.get_logger(self.metadata.name)
        self.config_store: Optional[ConfigStore] = None
        self._is_enabled = False
        self._commands: List[str] = []

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """
        Plugin metadata (name, version, commands, permissions).

        This should return a constant PluginMetadata instance.
        """

    @property
    def is_enabled(self) -> bool:
        return self._is_enabled

    @property
    def defaults_path(self) -> Optional[Path]:
        """Bundled default config.yml, copied on first enable."""
        return None

    # =================================================================
    # Lifecycle
    # =================================================================

    async def enable(self) -> None:
        """
        Load configuration (creating it from defaults if needed) and run setup().

        Raises:
            PluginStateError: If already enabled
            PluginSetupError: If configuration or setup() fails
        """
        if self._is_enabled:
            raise PluginStateError(f"{self.metadata} is already enabled")

        with self._timed("ENABLE"):
            store = self.host.config_store(self.metadata.name, self.defaults_path)
            try:
                store.save_default()
                store.load()
            except PluginConfigError as e:
                raise PluginSetupError(f"{self.metadata}: {e}") from e
            self.config_store = store

            try:
                await self.setup()
            except Exception:
                self._unregister_commands()
                self.config_store = None
                raise

            self._is_enabled = True

    async def disable(self) -> None:
        """Run teardown() and release everything registered with the host."""
        if not self._is_enabled:
            return

        with self._timed("DISABLE"):
            try:
                await self.teardown()
            finally:
                self._unregister_commands()
                self.config_store = None
                self._is_enabled = False

    def reload(self) -> None:
        """
        Reload configuration from its source.

        Raises:
            PluginStateError: If the plugin is not enabled
            PluginConfigError: If the configuration cannot be read
                (the previous configuration stays in effect)
        """
        if not self._is_enabled or self.config_store is None:
            raise PluginStateError(f"{self.metadata} is not enabled")

        with self._timed("RELOAD"):
            self.config_store.reload()
            self.on_reload()

    # =================================================================
    # Hooks
    # =================================================================

    async def setup(self) -> None:
        """
        Initialize plugin state. Configuration is loaded at this point.

        If this raises, the plugin is not enabled and any commands it
        registered are released again.
        """

    async def teardown(self) -> None:
        """
        Cleanup plugin (called once on disable).

        Should not raise exceptions (best effort cleanup).
        """

    def on_reload(self) -> None:
        """Called after the configuration has been reloaded."""

    # =================================================================
    # Commands
    # =================================================================

    def register_command(self, name: str, handler: CommandHandler) -> None:
        """Route a host command to handler; released automatically on disable."""
        self.host.register_command(name, handler)
        self._commands.append(name)
        self.logger.debug(f"Registered command '{name}'")

    def _unregister_commands(self) -> None:
        for name in self._commands:
            self.host.unregister_command(name)
        self._commands.clear()

    # =================================================================
    # Logging
    # =================================================================

    @contextmanager
    def _timed(self, phase: str) -> Iterator[None]:
        start = time.monotonic()
        self.logger.info(f"=== {phase} START ===")
        yield
        elapsed = int((time.monotonic() - start) * 1000)
        self.logger.info(f"=== {phase} COMPLETE ({elapsed}ms) ===")
