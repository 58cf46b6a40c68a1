"""Configuration package for StudyMate."""

from studymate.config.app_config import (
    AppConfig,
    ExportConfig,
    LoggingConfig,
    StorageConfig,
    clear_config_cache,
    get_storage_path,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "ExportConfig",
    "LoggingConfig",
    "StorageConfig",
    "clear_config_cache",
    "get_storage_path",
    "load_app_config",
]
