"""Configuration module for StatFinder."""

from statfinder.config.factory import create_from_config
from statfinder.config.loader import get_default_config_path, load_config
from statfinder.config.models import (
    ClaudeSearchConfig,
    ClaudeSummaryConfig,
    JsonFileLoaderConfig,
    LoaderConfig,
    LoggingConfig,
    SearchConfig,
    StatFinderConfig,
    SummaryConfig,
    SupabaseLoaderConfig,
)

__all__ = [
    "ClaudeSearchConfig",
    "ClaudeSummaryConfig",
    "JsonFileLoaderConfig",
    "LoaderConfig",
    "LoggingConfig",
    "SearchConfig",
    "StatFinderConfig",
    "SummaryConfig",
    "SupabaseLoaderConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
