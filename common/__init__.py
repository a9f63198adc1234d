"""Common utilities for the console runner."""
from .config import configure_logger, get_config

__all__ = ['get_config', 'configure_logger']
