"""Persistent JSON settings.

Stores the scan filter, display unit, default scan directory and default
sort method. Loading is forgiving: a missing or malformed file, or a bad
individual value, falls back to the default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

from diskmaid import ConfigError
from diskmaid.filter import DEFAULT_PATTERN
from diskmaid.order import DEFAULT_SORT, SortMethod
from diskmaid.units import DEFAULT_UNIT, Unit

logger = logging.getLogger(__name__)

APP_NAME = "diskmaid"
CONFIG_FILENAME = "settings.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(slots=True)
class AppConfig:
    """User preferences.

    Attributes:
        scan_filter: File filter pattern, e.g. ``*`` or ``*.txt``.
        unit: Unit used to render sizes.
        default_path: Directory scanned when none is given. Empty means
            the home directory.
        default_sort: Sort method applied to new scan results.
    """

    scan_filter: str = DEFAULT_PATTERN
    unit: Unit = DEFAULT_UNIT
    default_path: str = ""
    default_sort: SortMethod = DEFAULT_SORT

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["unit"] = self.unit.value
        data["default_sort"] = self.default_sort.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> AppConfig:
        """Build a config from decoded JSON, defaulting invalid fields."""
        config = cls()

        scan_filter = data.get("scan_filter")
        if isinstance(scan_filter, str) and scan_filter:
            config.scan_filter = scan_filter

        default_path = data.get("default_path")
        if isinstance(default_path, str):
            config.default_path = default_path

        unit = data.get("unit")
        if isinstance(unit, str):
            try:
                config.unit = Unit.parse(unit)
            except ValueError:
                logger.debug("Ignoring invalid unit in settings: %r", unit)

        default_sort = data.get("default_sort")
        if isinstance(default_sort, str):
            try:
                config.default_sort = SortMethod.parse(default_sort)
            except ValueError:
                logger.debug("Ignoring invalid sort method in settings: %r", default_sort)

        return config


def load_config(path: Path | None = None) -> AppConfig:
    """Load settings from ``path`` (default: per-user config file).

    Returns:
        AppConfig: Stored settings, or defaults when the file is missing,
        unreadable, or not a JSON object.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return AppConfig()
    except (OSError, ValueError):
        logger.debug("Cannot read settings: %s", config_path)
        return AppConfig()
    if not isinstance(data, dict):
        logger.debug("Settings file is not a JSON object: %s", config_path)
        return AppConfig()
    return AppConfig.from_dict(data)


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    """Persist settings as pretty-printed JSON.

    Returns:
        Path: File that was written.

    Raises:
        ConfigError: If the file or its directory cannot be written.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Error saving settings: {exc}") from exc
    logger.debug("Saved settings to %s", config_path)
    return config_path
