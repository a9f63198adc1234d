"""Host-independent plugin infrastructure."""

__version__ = "1.0.0"
