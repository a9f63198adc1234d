"""
Global pytest configuration and fixtures

Provides:
- In-memory host with recording senders
- Temporary data folders for YAML-backed config stores
"""

import pytest

from lib.host.memory import MemoryHost, MemorySender
from lib.plugin.host import Location


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "plugin: Plugin tests")


# ============================================================================
# Hosts
# ============================================================================

@pytest.fixture
def memory_host(tmp_path):
    """In-memory host with no players and no plugin configuration."""
    return MemoryHost(data_root=tmp_path)


@pytest.fixture
def console_sender():
    """Non-player sender holding every permission."""
    return MemorySender()


@pytest.fixture
def spawn():
    """A location at the default spawn point."""
    return Location("world", 0.5, 64.0, 0.5)
