from __future__ import annotations
from pathlib import Path
import fcntl
from typing import Any, Dict
import yaml

from recruitbot.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_CLOSE_DELAY_SECONDS = 5.0
DEFAULT_PRESENCE_TEXT = "les candidatures"


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    typed shortcuts for the values the bot reads. A missing or malformed file
    behaves like an empty one, so every shortcut falls back to its default.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.warning("[APP CONFIGURATION] Config file %s not found, using defaults.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.error("[APP CONFIGURATION] Config %s is not a mapping; ignoring it.", self.config_path)
            return {}
        return data

    def _section(self, key: str) -> Dict[str, Any]:
        value = self._data.get(key, {})
        return value if isinstance(value, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Re-read the YAML file, replace the in-memory cache and return it."""
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """Return the current cached configuration mapping (do not mutate)."""
        return self._data

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def close_delay_seconds(self) -> float:
        """Seconds between a close request and the deletion of the ticket channel."""
        raw = self._section("tickets").get("close_delay_seconds", DEFAULT_CLOSE_DELAY_SECONDS)
        try:
            delay = float(raw)
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid tickets.close_delay_seconds %r; using default.", raw)
            return DEFAULT_CLOSE_DELAY_SECONDS
        return max(delay, 0.0)

    @property
    def presence_text(self) -> str:
        """Activity text shown in the bot's "Watching ..." presence."""
        value = self._section("presence").get("text") or DEFAULT_PRESENCE_TEXT
        return str(value)

    @property
    def guild_defaults(self) -> Dict[str, Any]:
        """Overrides applied on top of the built-in default guild configuration."""
        return self._section("guild_defaults")


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
