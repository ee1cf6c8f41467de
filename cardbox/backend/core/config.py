"""
Configuration Management.

Two sources, both located from the project root (the directory holding
.project_root):

    config/settings/*.yaml   application, database and logging settings,
                             validated by the schemas in config_schema
    config/.env + env vars   DATABASE_URL overrides the YAML url;
                             DB_PASSWORD fills a {password} placeholder in it

Both are loaded once per process (lru_cache). Tests clear the caches.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from cardbox.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

MARKER_FILE = ".project_root"


def find_project_root() -> Path:
    """Walk up from the working directory to the first one holding the marker."""
    for directory in (Path.cwd(), *Path.cwd().parents):
        if (directory / MARKER_FILE).exists():
            return directory
    raise RuntimeError(f"Project root not found: no {MARKER_FILE} above {Path.cwd()}")


def validate_project_root() -> Path:
    """find_project_root() for entry scripts: exits with a message instead of raising."""
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read config/settings/<filename>; an empty file gives {}."""
    path = find_project_root() / "config" / "settings" / filename
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _load_section(schema: type[SchemaT], filename: str) -> SchemaT:
    try:
        return schema(**load_yaml_config(filename))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class Settings(BaseSettings):
    """Secrets, read from the environment and config/.env."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    database_url: str | None = None
    db_password: str = ""


class AppConfig:
    """The three YAML files, each validated against its schema on construction."""

    def __init__(self) -> None:
        self.application: ApplicationSchema = _load_section(ApplicationSchema, "application.yaml")
        self.database: DatabaseSchema = _load_section(DatabaseSchema, "database.yaml")
        self.logging: LoggingSchema = _load_section(LoggingSchema, "logging.yaml")


@lru_cache
def get_settings() -> Settings:
    env_file = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_file), _env_file_encoding="utf-8")


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


def get_database_url() -> str:
    """DATABASE_URL if set, else database.yaml's url with {password} filled in."""
    settings = get_settings()
    if settings.database_url:
        return settings.database_url
    return get_app_config().database.url.replace("{password}", settings.db_password)


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")
