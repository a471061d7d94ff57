"""
Configuration settings for the Restaurant Service
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# Environment variable -> (settings field, parser)
_ENV_FIELDS = {
    "PG_USER": ("db_user", str),
    "PG_HOST": ("db_host", str),
    "PG_DATABASE": ("db_name", str),
    "PG_PASSWORD": ("db_password", str),
    "PG_PORT": ("db_port", int),
    "DATABASE_URL": ("database_url", str),
    "DB_POOL_MIN_SIZE": ("pool_min_size", int),
    "DB_POOL_MAX_SIZE": ("pool_max_size", int),
    "DB_COMMAND_TIMEOUT": ("command_timeout", float),
    "PORT": ("port", int),
    "LOG_LEVEL": ("log_level", str),
    "ALLOWED_ORIGINS": ("allowed_origins", lambda raw: [o.strip() for o in raw.split(",") if o.strip()]),
}


@dataclass
class Settings:
    """Service settings. Defaults target a local development database."""

    db_user: str = "postgres"
    db_host: str = "localhost"
    db_name: str = "restaurants_db"
    db_password: str = "123"
    db_port: int = 5432

    # Full DSN; takes precedence over the PG_* fields when set
    database_url: Optional[str] = None

    pool_min_size: int = 1
    pool_max_size: int = 10
    command_timeout: float = 60.0

    port: int = 8080
    log_level: str = "INFO"
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults"""
        environ = os.environ if environ is None else environ
        values = {}
        errors = []

        for env_name, (attr, parse) in _ENV_FIELDS.items():
            raw = environ.get(env_name)
            if raw is None or raw == "":
                continue
            try:
                values[attr] = parse(raw)
            except ValueError:
                errors.append(f"{env_name} has invalid value {raw!r}")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()
        return cls(**values)

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if not self.database_url:
            for attr in ("db_user", "db_host", "db_name"):
                if not getattr(self, attr):
                    errors.append(f"{attr} must not be empty")

        for attr in ("db_port", "port"):
            if not 0 < getattr(self, attr) < 65536:
                errors.append(f"{attr} must be between 1 and 65535")

        if self.pool_min_size < 0:
            errors.append("pool_min_size must not be negative")
        if self.pool_max_size < 1:
            errors.append("pool_max_size must be at least 1")
        if self.pool_min_size > self.pool_max_size:
            errors.append("pool_min_size must not exceed pool_max_size")
        if self.command_timeout <= 0:
            errors.append("command_timeout must be positive")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")

        return errors

    @property
    def dsn(self) -> str:
        """PostgreSQL connection URL for asyncpg"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{quote(self.db_user, safe='')}:{quote(self.db_password, safe='')}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


def get_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Get validated settings"""
    settings = Settings.from_env(environ)
    errors = settings.validate()

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return settings
