"""Configuration management for Radar."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.views import Identity, View

logger = logging.getLogger(__name__)

RADAR_HOME = Path(os.environ.get("RADAR_HOME", Path.home() / "radar"))
CONFIG_FILE = RADAR_HOME / "config" / "radar.conf"
DATA_DIR = RADAR_HOME / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """Radar configuration."""

    data_file: str = ""
    api_base_url: str = ""
    api_token: str = ""
    user_id: str = ""
    user_name: str = ""
    max_items: int = 10
    show_filters: bool = True
    default_view: str = "all"

    @property
    def snapshot_path(self) -> Path:
        """Where the JSON store lives, falling back to the data dir."""
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DATA_DIR / "snapshot.json"

    def identity(self) -> Identity:
        return Identity(uid=self.user_id or None, display_name=self.user_name or None)


def _strip_value(value: str) -> str:
    """Handle quoted values with inline comments: "value" # comment"""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from radar.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "data_file":
                config.data_file = value
            case "api_base_url":
                config.api_base_url = value
            case "api_token":
                config.api_token = value
            case "user_id":
                config.user_id = value
            case "user_name":
                config.user_name = value
            case "max_items":
                try:
                    max_items = int(value)
                except ValueError:
                    max_items = None
                if max_items is not None and max_items >= 0:
                    config.max_items = max_items
                else:
                    logger.warning(f"Invalid MAX_ITEMS {value!r}, keeping {config.max_items}")
            case "show_filters":
                if value.lower() in _TRUE:
                    config.show_filters = True
                elif value.lower() in _FALSE:
                    config.show_filters = False
                else:
                    logger.warning(f"Invalid SHOW_FILTERS {value!r}, keeping {config.show_filters}")
            case "default_view":
                try:
                    config.default_view = View.parse(value).value
                except ValueError as e:
                    logger.warning(f"{e}; keeping {config.default_view}")

    return config
