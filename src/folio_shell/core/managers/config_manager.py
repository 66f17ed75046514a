# src/folio_shell/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from folio_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def _load_settings() -> Dict[str, Any]:
    """Reads settings.json; a missing or unreadable file yields an empty config."""
    settings_path = PathUtils.get_settings_path()
    if not settings_path.exists():
        logger.warning("settings.json not found at %s. Using empty config.", settings_path)
        return {}
    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to load settings.json: %s", e, exc_info=True)
        return {}


def _cast_like(existing: Any, value: Any, key_path: str) -> Any:
    """Casts a CLI string to the type of the value it replaces ('3' -> 3 for an int setting)."""
    if existing is None or isinstance(value, type(existing)):
        return value
    try:
        return type(existing)(value)
    except (ValueError, TypeError):
        logger.warning(
            "Could not cast new value for '%s' to %s. Storing as given.",
            key_path, type(existing).__name__
        )
        return value


class ConfigManager:
    """
    Process-wide settings for the auditor: analyzer timeout, continuation
    attempts, auto-fix language, CSV separator and log levels.

    Loaded from settings.json; `--set key=value` on the command line
    overrides values in memory for a single run.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Dotted lookup, e.g. 'continuation.max_attempts'. Missing keys give `default`."""
        node: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return default if node is None else node

    def set_nested(self, key_path: str, value: Any) -> bool:
        *parents, leaf = key_path.split('.')
        node = self._config
        for key in parents:
            node = node.setdefault(key, {})
            if not isinstance(node, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return False

        node[leaf] = _cast_like(node.get(leaf), value, key_path)
        logger.info("Configuration updated: %s = %s", key_path, node[leaf])
        return True

    def reset(self) -> None:
        """Drops in-memory overrides and reloads settings.json."""
        self._config = _load_settings()
        logger.debug("Configuration (re)loaded.")


config_manager = ConfigManager()
