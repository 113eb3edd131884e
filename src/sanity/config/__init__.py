"""Sanity configuration - config loading and models."""

from .loader import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    ConfigLoader,
    ValidationIssue,
    ValidationResult,
    load_config,
    resolve_env_vars,
)
from .models import (
    BuildConfig,
    LoggingComponentsConfig,
    LoggingConfig,
    MinifyConfig,
    PathsConfig,
    PoisonConfig,
    SanityConfig,
    ScriptsConfig,
    ServerConfig,
    WatchConfig,
)

__all__ = [
    # Config models
    "SanityConfig",
    "PathsConfig",
    "ServerConfig",
    "WatchConfig",
    "BuildConfig",
    "MinifyConfig",
    "PoisonConfig",
    "ScriptsConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    # Loader
    "ConfigLoader",
    "load_config",
    "ValidationIssue",
    "ValidationResult",
    "CONFIG_FILENAME",
    "CONFIG_ENV_VAR",
    # Utilities
    "resolve_env_vars",
]
