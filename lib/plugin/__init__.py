"""
lib/plugin

Plugin system for host-independent game server add-ons.

This module provides:
- Plugin: Abstract base class with the enable/reload/disable lifecycle
- PluginMetadata: Plugin identity, commands and permission nodes
- HostBindings: What a host framework offers to plugins
- ConfigStore: Snapshot-based plugin configuration (YAML or in-memory)
- Exception hierarchy for plugin errors

Example:
    from lib.plugin import Plugin, PluginMetadata

    class MyPlugin(Plugin):
        @property
        def metadata(self):
            return PluginMetadata(
                name='my_plugin',
                display_name='My Plugin',
                version='1.0.0',
                description='Does cool stuff',
                author='Me'
            )

    plugin = MyPlugin(host)
    await plugin.enable()
"""

from .base import Plugin
from .config import ConfigSnapshot, ConfigStore, MemoryConfigStore, YamlConfigStore
from .errors import (
    CommandAlreadyRegisteredError,
    PluginConfigError,
    PluginError,
    PluginSetupError,
    PluginStateError,
)
from .host import (
    CommandHandler,
    CommandSender,
    HostBindings,
    Location,
    Player,
    plain_text,
    translate_alternate_color_codes,
)
from .metadata import PluginMetadata

__all__ = [
    "Plugin",
    "PluginMetadata",
    "ConfigSnapshot",
    "ConfigStore",
    "MemoryConfigStore",
    "YamlConfigStore",
    "CommandHandler",
    "CommandSender",
    "HostBindings",
    "Location",
    "Player",
    "plain_text",
    "translate_alternate_color_codes",
    "PluginError",
    "PluginSetupError",
    "PluginConfigError",
    "PluginStateError",
    "CommandAlreadyRegisteredError",
]
