"""
lib/plugin/config.py

Plugin configuration stores.

A store holds one immutable ConfigSnapshot at a time. Reading goes through
the current snapshot; reloading builds a complete new snapshot and swaps the
reference in a single assignment, so readers see either the old or the new
configuration, never a mix.
"""

import copy
import logging
import math
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import PluginConfigError

_MISSING = object()


class ConfigSnapshot:
    """
    Read-only view over nested configuration data.

    Keys use dot notation for nesting, so ``get('maximum.count')`` reads
    ``{'maximum': {'count': ...}}``. Typed getters fall back to the default
    when the value is missing or has the wrong type.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data = copy.deepcopy(dict(data or {}))

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else copy.deepcopy(value)

    def contains(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def get_string(self, key: str, default: str) -> str:
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, (dict, list)):
            return default
        return str(value)

    def get_int(self, key: str, default: int) -> int:
        value = self._lookup(key)
        # bool is an int subclass, but a flag is not a number
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        # .inf and .nan parse as floats but have no integer value
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return default

    def get_boolean(self, key: str, default: bool) -> bool:
        value = self._lookup(key)
        if isinstance(value, bool):
            return value
        return default

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def _lookup(self, key: str) -> Any:
        value: Any = self._data
        for part in key.split('.'):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return _MISSING
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigSnapshot):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"ConfigSnapshot({self._data!r})"


class ConfigStore(ABC):
    """
    Persistent key-value configuration for a single plugin.

    Subclasses decide where the data lives; they only need to implement
    loading and default-saving.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._snapshot = ConfigSnapshot()

    @property
    def snapshot(self) -> ConfigSnapshot:
        """The configuration currently in effect."""
        return self._snapshot

    @abstractmethod
    def _read(self) -> Dict[str, Any]:
        """
        Read the full configuration from its source.

        Raises:
            PluginConfigError: If the source cannot be read or parsed
        """

    @abstractmethod
    def save_default(self) -> bool:
        """
        Create the configuration from its defaults if it does not exist.

        Returns:
            True if a default configuration was written
        """

    def load(self) -> ConfigSnapshot:
        """Read the source and make it the current snapshot."""
        snapshot = ConfigSnapshot(self._read())
        self._snapshot = snapshot
        return snapshot

    def reload(self) -> ConfigSnapshot:
        """
        Discard the current snapshot and load a fresh one.

        On failure the previous snapshot stays in effect.
        """
        return self.load()

    # Convenience passthroughs to the current snapshot

    def get(self, key: str, default: Any = None) -> Any:
        return self._snapshot.get(key, default)

    def get_string(self, key: str, default: str) -> str:
        return self._snapshot.get_string(key, default)

    def get_int(self, key: str, default: int) -> int:
        return self._snapshot.get_int(key, default)

    def get_boolean(self, key: str, default: bool) -> bool:
        return self._snapshot.get_boolean(key, default)


class MemoryConfigStore(ConfigStore):
    """
    Configuration held in memory.

    ``set()`` edits the backing data only; changes become visible after the
    next ``reload()``, the same as editing a config file on disk.
    """

    def __init__(
        self,
        data: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger)
        self._source: Optional[Dict[str, Any]] = (
            copy.deepcopy(dict(data)) if data is not None else None
        )
        self._defaults: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        if self._source is None:
            self._source = {}
        node = self._source
        parts = key.split('.')
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def set_defaults(self, defaults: Mapping[str, Any]) -> None:
        self._defaults = copy.deepcopy(dict(defaults))

    def _read(self) -> Dict[str, Any]:
        return copy.deepcopy(self._source or {})

    def save_default(self) -> bool:
        if self._source is not None:
            return False
        self._source = copy.deepcopy(self._defaults)
        return True


class YamlConfigStore(ConfigStore):
    """
    Configuration stored as a YAML file.

    Args:
        path: Location of the config file (e.g. <data folder>/config.yml)
        defaults_path: Bundled default config copied by save_default()

    Example:
        store = YamlConfigStore(Path('data/dice/config.yml'),
                                defaults_path=Path('plugins/dice/config.yml'))
        store.save_default()
        store.load()
        store.get_int('maximum.count', 6)
    """

    def __init__(
        self,
        path: Path,
        defaults_path: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger)
        self.path = Path(path)
        self.defaults_path = Path(defaults_path) if defaults_path else None

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            self.logger.debug(f"No config file at {self.path}, using defaults")
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as fp:
                data = yaml.safe_load(fp)
        except (OSError, yaml.YAMLError) as e:
            raise PluginConfigError(f"Could not load {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PluginConfigError(
                f"Could not load {self.path}: top level must be a mapping"
            )
        return data

    def save_default(self) -> bool:
        if self.path.exists():
            return False

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.defaults_path and self.defaults_path.exists():
                shutil.copyfile(self.defaults_path, self.path)
            else:
                with open(self.path, 'w', encoding='utf-8') as fp:
                    yaml.safe_dump({}, fp)
        except OSError as e:
            raise PluginConfigError(f"Could not save {self.path}: {e}") from e

        self.logger.info(f"Saved default {self.path.name}")
        return True

    def save(self) -> None:
        """Write the current snapshot back to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as fp:
                yaml.safe_dump(
                    self._snapshot.to_dict(), fp,
                    default_flow_style=False, allow_unicode=True,
                )
        except OSError as e:
            raise PluginConfigError(f"Could not save {self.path}: {e}") from e
