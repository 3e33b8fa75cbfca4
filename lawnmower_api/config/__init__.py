"""Configuration module."""

from lawnmower_api.config.configuration import (
    ApiConfig,
    AppConfig,
    CatalogConfig,
    ConfigurationError,
    LoggingConfig,
    LogStoreConfig,
    PostgresConfig,
    get_config,
    load_config,
    reset_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "CatalogConfig",
    "ConfigurationError",
    "LoggingConfig",
    "LogStoreConfig",
    "PostgresConfig",
    "get_config",
    "load_config",
    "reset_config",
]
