"""
Application configuration.

Loads settings from environment variables, optionally seeded by a local
.env file. Real environment variables take precedence over the file and
a missing file is not an error.

Empty variables count as unset. The database connection fields have no defaults: a Settings value with
any of them empty is rejected at construction time.
"""

from typing import Literal

from pydantic import ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_ENV_FILE = ".env"
MISSING_FIELD_ERROR = "missing_field"

REQUIRED_DB_FIELDS = ("db_host", "db_port", "db_user", "db_password", "db_name")


class ConfigError(Exception):
    """Raised when the configuration cannot be resolved."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class MissingFieldError(ConfigError):
    """Raised when required configuration variables are empty or unset."""

    def __init__(self, fields: list[str]) -> None:
        names = ", ".join(field.upper() for field in fields)
        super().__init__(f"Missing required configuration: {names}")
        self.fields = fields


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        port: TCP port the HTTP server listens on.
        host: Bind address for the HTTP server.
        db_host: Database server host name.
        db_port: Database server port.
        db_user: Database user name.
        db_password: Database password.
        db_name: Database name.
        db_driver: SQLAlchemy driver name used to build the connection URL.
        db_pool_size: Persistent connections kept in the pool.
        db_max_overflow: Extra connections allowed above the pool size.
        db_pool_timeout: Seconds to wait for a pooled connection.
        db_connect_timeout: Seconds to wait when opening a connection.
        auto_migrate: Create the users table on startup if it is missing.
        storage_backend: "sql" for the database, "memory" for a process-local store.
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_enabled: Toggle request rate limiting.
    """

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    port: int = 8080
    host: str = "0.0.0.0"

    db_host: str = ""
    db_port: str = ""
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""
    db_driver: str = "postgresql+psycopg2"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_connect_timeout: int = 10
    auto_migrate: bool = True
    storage_backend: Literal["sql", "memory"] = "sql"

    project_name: str = "users-api"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "120/minute"
    rate_limit_enabled: bool = True

    @field_validator(*REQUIRED_DB_FIELDS, mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("db_port")
    @classmethod
    def _numeric_port(cls, value: str) -> str:
        if value and not value.isdigit():
            raise ValueError("DB_PORT must be a number")
        return value

    @model_validator(mode="after")
    def _require_db_fields(self) -> "Settings":
        missing = [name for name in REQUIRED_DB_FIELDS if not getattr(self, name)]
        if missing:
            raise PydanticCustomError(
                MISSING_FIELD_ERROR,
                "missing required configuration: {fields}",
                {"fields": missing},
            )
        return self

    def database_url(self) -> URL:
        """Return the SQLAlchemy URL for the configured database."""
        return URL.create(
            drivername=self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=int(self.db_port),
            database=self.db_name,
        )


def load_settings(env_file: str | None = DEFAULT_ENV_FILE) -> Settings:
    """Resolve the application settings.

    Args:
        env_file: Optional .env file used to seed values that are not set
            in the process environment. None disables the file.

    Returns:
        A validated, immutable Settings value.

    Raises:
        MissingFieldError: If any database connection field is empty.
        ConfigError: If any other value is invalid.
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        for error in exc.errors():
            if error["type"] == MISSING_FIELD_ERROR:
                raise MissingFieldError(list(error["ctx"]["fields"])) from exc
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {details}") from exc
