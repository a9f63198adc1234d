"""
lib/plugin/errors.py

Plugin-specific exceptions.
"""


class PluginError(Exception):
    """Base exception for plugin errors."""
    pass


class PluginSetupError(PluginError):
    """Plugin enable/setup failed."""
    pass


class PluginConfigError(PluginError):
    """Plugin configuration could not be loaded or saved."""
    pass


class PluginStateError(PluginError):
    """Operation not valid in the plugin's current lifecycle state."""
    pass


class CommandAlreadyRegisteredError(PluginError):
    """Another handler already owns this command name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Command '{name}' is already registered")
