"""Configuration loading for FX Journal.

Settings live in ``config.toml`` under the journal home directory,
``~/.config/fxjournal`` unless ``FXJOURNAL_HOME`` points elsewhere.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import toml
from rich.console import Console
from rich.logging import RichHandler

from fxjournal.analytics.windows import WINDOWS
from fxjournal.db.store import DataStore
from fxjournal.numbers import is_blank, is_finite_number

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "FXJOURNAL_HOME"
CONFIG_FILENAME = "config.toml"
DB_FILENAME = "fxjournal.db"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_CONFIG = {
    "journal": {
        "default_pair": "EUR/USD",
        "chart_window": "week",  # rolling window for stats/equity/pairs
        "list_window": "all",  # calendar window for the trade list
    },
    "risk": {
        "default_risk_percentage": 1.0,
    },
    "logging": {
        "level": "WARNING",
    },
}


def get_home() -> Path:
    """Directory holding the config file and database."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".config" / "fxjournal"


def get_config_path() -> Path:
    return get_home() / CONFIG_FILENAME


def _merge(base: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        path: Config file. Defaults to ``get_config_path()``.

    Returns:
        Configuration dictionary. Defaults only if the file is missing
        or cannot be parsed.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        return _merge(DEFAULT_CONFIG, toml.load(config_path))
    except toml.TomlDecodeError as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)


def validate_config(config: dict) -> list[str]:
    """Validate configuration values.

    Args:
        config: Configuration dictionary, as returned by ``load_config``.

    Returns:
        List of problems, one per offending key. Empty if the config is usable.
    """
    problems = []
    for section in DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            problems.append(f"{section} must be a table")
    if problems:
        return problems

    journal = config["journal"]
    for key in ("chart_window", "list_window"):
        if journal.get(key) not in WINDOWS:
            problems.append(
                f"journal.{key} = {journal.get(key)!r} (expected one of {', '.join(WINDOWS)})"
            )
    if not isinstance(journal.get("default_pair"), str) or is_blank(journal["default_pair"]):
        problems.append("journal.default_pair must be a non-empty string")

    if not is_finite_number(config["risk"].get("default_risk_percentage")):
        problems.append("risk.default_risk_percentage must be a number")

    level = config["logging"].get("level")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        problems.append(
            f"logging.level = {level!r} (expected one of {', '.join(LOG_LEVELS)})"
        )

    return problems


def write_template_config(path: Optional[Path] = None) -> Path:
    """Create a template configuration file with the default settings."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_data_store() -> DataStore:
    """Get the data store instance."""
    return DataStore(get_home() / DB_FILENAME)


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Route log records through rich on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
