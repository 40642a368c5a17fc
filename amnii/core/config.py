"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
    "sqlite://",
)

# HMAC algorithms only: tokens are signed and verified with the same shared secret.
JWT_ALGORITHMS = ("HS256", "HS384", "HS512")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"

    HOST: str = "0.0.0.0"
    PORT: int = 4500

    # SQLite is fine for local development; use PostgreSQL in prod.
    DATABASE_URL: str = "sqlite:///./amnii.db"

    # JWT signing. No default: the process must not start without a secret.
    JWT_PRIVATE_KEY: SecretStr
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # Bcrypt cost factor (log2 rounds).
    BCRYPT_ROUNDS: int = 10

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL or SQLite URL "
                "(e.g. postgresql://... or sqlite:///./amnii.db)"
            )
        return v.strip()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("JWT_PRIVATE_KEY")
    @classmethod
    def validate_jwt_private_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_PRIVATE_KEY must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        if v.strip() not in JWT_ALGORITHMS:
            raise ValueError(f"JWT_ALGORITHM must be one of {', '.join(JWT_ALGORITHMS)}")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Raises pydantic.ValidationError on bad env."""
    return Settings()
