"""
lib/plugin/metadata.py

Plugin metadata structure.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class PluginMetadata:
    """
    Plugin identity plus the commands and permission nodes it declares.

    Attributes:
        name: Plugin identifier (lowercase, alphanumeric + underscores)
        display_name: Human-readable name for logs
        version: Semantic version string (e.g., '1.0.0')
        description: Short description of plugin functionality
        author: Plugin author/maintainer
        commands: Command name -> usage string
        permissions: Permission node -> description
        website: Optional project URL

    Example:
        metadata = PluginMetadata(
            name='dice',
            display_name='Dice',
            version='1.0.0',
            description='Roll dice with /roll',
            author='EasyMFnE',
            commands={'roll': '/roll [count] [d<sides>]'},
            permissions={'dice.reload': 'Reload the configuration'},
        )
    """
    name: str
    display_name: str
    version: str
    description: str
    author: str
    commands: Dict[str, str] = field(default_factory=dict)
    permissions: Dict[str, str] = field(default_factory=dict)
    website: Optional[str] = None

    def __post_init__(self):
        """Validate metadata after initialization."""
        if not self.name.replace('_', '').isalnum() or not self.name.islower():
            raise ValueError(
                f"Plugin name '{self.name}' must be lowercase alphanumeric "
                "with underscores only"
            )

        version_parts = self.version.split('.')
        if len(version_parts) != 3 or not all(p.isdigit() for p in version_parts):
            raise ValueError(
                f"Plugin version '{self.version}' must be semantic version "
                "(e.g., '1.0.0')"
            )

    def __str__(self) -> str:
        """String representation for logs."""
        return f"{self.display_name} v{self.version}"
