"""Plugins shipped with this repository."""
