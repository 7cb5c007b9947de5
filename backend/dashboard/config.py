"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import List, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "innovaite_projects_dashboard"


class MongoConfig(BaseModel):
    """MongoDB connection parameters."""

    url: str = "mongodb://localhost:27017"
    database: Optional[str] = None  # Falls back to the URL path, then the default name
    server_selection_timeout_ms: int = 5000
    connect_timeout_ms: int = 10000


class CorsConfig(BaseModel):
    """Cross-origin resource sharing."""

    allowed_origins: str = "*"  # Comma-separated, "*" allows any origin
    allow_credentials: bool = True

    @property
    def origins(self) -> List[str]:
        """Parse comma-separated origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


class PasswordConfig(BaseModel):
    """Argon2id cost parameters for new password hashes."""

    time_cost: int = 3
    memory_cost: int = 65536  # KiB
    parallelism: int = 4
    hash_len: int = 32
    salt_len: int = 16

    @field_validator("time_cost", "memory_cost", "parallelism", "hash_len", "salt_len")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Argon2 parameters must be positive")
        return v


class Settings(BaseSettings):
    """Main configuration class."""

    # Application
    environment: str = Field(default="development", description="development, staging, production")
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Logging / observability
    log_level: str = "INFO"
    logfire_token: str = ""

    # Legacy single-variable connection string, wins over mongodb.url when set
    mongodb_connection_string: str = ""

    # Nested configuration sections
    mongodb: MongoConfig = Field(default_factory=MongoConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    passwords: PasswordConfig = Field(default_factory=PasswordConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def apply_connection_string(self) -> "Settings":
        """Let MONGODB_CONNECTION_STRING override the nested URL."""
        if self.mongodb_connection_string:
            self.mongodb.url = self.mongodb_connection_string
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"

    @property
    def database_name(self) -> str:
        """
        Resolve the database name.

        Explicit configuration wins; otherwise the path component of the
        connection URL is used (query string stripped), and finally the
        default name.
        """
        if self.mongodb.database:
            return self.mongodb.database
        return database_name_from_url(self.mongodb.url)


def database_name_from_url(url: str) -> str:
    """Extract the database name from a MongoDB URL path, if there is one."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return DEFAULT_DATABASE_NAME
    name = path.lstrip("/")
    return name or DEFAULT_DATABASE_NAME


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    return Settings()
