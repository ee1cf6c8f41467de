"""
Configuration Schemas.

One model per file in config/settings/. Unknown keys are rejected so a
typo in YAML fails at startup rather than silently falling back.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ServerSchema(_Section):
    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_Section):
    origins: list[str]
    allow_methods: list[str]
    allow_headers: list[str]
    allow_credentials: bool


class ApplicationSchema(_Section):
    """application.yaml"""

    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    server: ServerSchema
    cors: CorsSchema


class DatabaseSchema(_Section):
    """database.yaml; pool settings are ignored for SQLite."""

    url: str
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    echo: bool
    create_tables_on_startup: bool
    ready_timeout_seconds: int = Field(gt=0)


class ConsoleHandlerSchema(_Section):
    enabled: bool


class FileHandlerSchema(_Section):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_Section):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_Section):
    """logging.yaml"""

    level: str
    format: Literal["json", "console"]
    handlers: HandlersSchema
