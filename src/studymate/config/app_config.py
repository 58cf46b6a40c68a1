"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
falling back to built-in defaults when the file is missing.

Usage:
    from studymate.config.app_config import load_app_config, get_storage_path

    config = load_app_config()
    path = get_storage_path()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

# Overrides storage.data_dir when set
DATA_DIR_ENV = "STUDYMATE_DATA_DIR"


@dataclass
class StorageConfig:
    """Where the store snapshot is mirrored."""

    data_dir: str = "data/state"
    filename: str = "local_storage.json"
    key: str = "studyMateDB"


@dataclass
class LoggingConfig:
    """Logging level and renderer."""

    level: str = "WARNING"
    format: str = "console"  # console | json


@dataclass
class ExportConfig:
    """CSV export defaults."""

    filename: str = "study_mate_data_export.csv"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "storage": {
            "data_dir": "data/state",
            "filename": "local_storage.json",
            "key": "studyMateDB",
        },
        "logging": {
            "level": "WARNING",
            "format": "console",
        },
        "export": {
            "filename": "study_mate_data_export.csv",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    storage_data = {**defaults["storage"], **(data.get("storage") or {})}
    storage = StorageConfig(
        data_dir=str(storage_data["data_dir"]),
        filename=str(storage_data["filename"]),
        key=str(storage_data["key"]),
    )

    logging_data = {**defaults["logging"], **(data.get("logging") or {})}
    logging_config = LoggingConfig(
        level=str(logging_data["level"]).upper(),
        format=str(logging_data["format"]).lower(),
    )

    export_data = {**defaults["export"], **(data.get("export") or {})}
    export = ExportConfig(filename=str(export_data["filename"]))

    return AppConfig(storage=storage, logging=logging_config, export=export)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def get_storage_path(data_dir: Path | None = None) -> Path:
    """Resolve the storage file path.

    Precedence: explicit ``data_dir`` argument, then the STUDYMATE_DATA_DIR
    environment variable, then ``storage.data_dir`` from the config.
    """
    config = load_app_config()
    if data_dir is None:
        env_dir = os.environ.get(DATA_DIR_ENV)
        data_dir = Path(env_dir) if env_dir else Path(config.storage.data_dir)
    return data_dir / config.storage.filename


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
