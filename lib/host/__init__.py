"""
lib/host

Concrete HostBindings implementations that need no game server:
- MemoryHost: everything in memory, records delivered messages (tests)
- ConsoleHost: interactive terminal host with YAML config files
"""

from .console import ConsoleHost, ConsolePlayer, ConsoleSender
from .memory import MemoryHost, MemoryPlayer, MemorySender

__all__ = [
    "ConsoleHost",
    "ConsolePlayer",
    "ConsoleSender",
    "MemoryHost",
    "MemoryPlayer",
    "MemorySender",
]
