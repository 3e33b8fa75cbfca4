"""Configuration module for the Lawnmower Catalog API.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (SQLite log store, local development)
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

Secrets (the PostgreSQL connection string) are loaded from the .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml
from dotenv import load_dotenv

LOG_STORE_BACKENDS = ("sqlite", "postgres")
COLUMN_STYLES = ("snake_case", "camelCase")
REAR_ROLLER_STORAGES = ("integer", "text")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from lawnmower_api/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


def _require_choice(section: str, key: str, value: str, choices: Tuple[str, ...]) -> str:
    if value not in choices:
        raise ConfigurationError(
            f"Invalid value '{value}' for {section}.{key}. "
            f"Expected one of: {', '.join(choices)}."
        )
    return value


@dataclass(frozen=True)
class CatalogConfig:
    """Read-only product catalog (SQLite) configuration."""
    path: str
    table: str
    column_style: str
    rear_roller_storage: str


@dataclass(frozen=True)
class LogStoreConfig:
    """Debug log store configuration with backend toggle."""
    backend: str  # "sqlite" or "postgres"
    sqlite_path: str
    table: str


@dataclass(frozen=True)
class PostgresConfig:
    """PostgreSQL configuration for the debug log store."""
    database_url: str
    min_connections: int
    max_connections: int
    sslmode: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class ApiConfig:
    """HTTP API configuration."""
    cors_origins: Tuple[str, ...]


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    catalog: CatalogConfig
    log_store: LogStoreConfig
    logging: LoggingConfig
    api: ApiConfig
    postgres: Optional[PostgresConfig]  # Only required when log_store.backend == "postgres"


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for non-sensitive settings and .env for secrets.
    Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build Catalog config
    catalog_section = yaml_config.get("catalog", {})

    catalog_config = CatalogConfig(
        path=_get_optional_env("CATALOG_DB_PATH", catalog_section.get("path", "lawnmowers.db")),
        table=catalog_section.get("table", "Lawnmowers"),
        column_style=_require_choice(
            "catalog", "column_style",
            catalog_section.get("column_style", "snake_case"), COLUMN_STYLES,
        ),
        rear_roller_storage=_require_choice(
            "catalog", "rear_roller_storage",
            catalog_section.get("rear_roller_storage", "integer"), REAR_ROLLER_STORAGES,
        ),
    )

    # Build LogStore config
    log_store_section = yaml_config.get("log_store", {})
    log_store_backend = _require_choice(
        "log_store", "backend",
        log_store_section.get("backend", "sqlite"), LOG_STORE_BACKENDS,
    )

    log_store_config = LogStoreConfig(
        backend=log_store_backend,
        sqlite_path=log_store_section.get("sqlite_path", "debug_logs.db"),
        table=log_store_section.get("table", "debug_logs"),
    )

    # Build Postgres config (only if backend is postgres)
    postgres_config: Optional[PostgresConfig] = None
    if log_store_backend == "postgres":
        postgres_section = yaml_config.get("postgres", {})
        postgres_config = PostgresConfig(
            database_url=_get_required_env("DATABASE_URL"),
            min_connections=int(postgres_section.get("min_connections", 0)),
            max_connections=int(postgres_section.get("max_connections", 10)),
            sslmode=postgres_section.get("sslmode", "require"),
        )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    # Build API config
    api_section = yaml_config.get("api", {})

    api_config = ApiConfig(
        cors_origins=tuple(api_section.get("cors_origins", ["*"])),
    )

    return AppConfig(
        catalog=catalog_config,
        log_store=log_store_config,
        logging=logging_config,
        api=api_config,
        postgres=postgres_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
