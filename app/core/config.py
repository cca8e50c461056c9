"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


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

    # Browser origins allowed to call the API (the single-page client).
    CORS_ORIGINS: list[str] = ["http://localhost:4200"]

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # Bcrypt cost (rounds)
    BCRYPT_ROUNDS: int = 10

    # Users list client
    USERS_API_BASE_URL: str = "http://localhost:8000/api"
    USERS_API_TIMEOUT_SEC: float = 10.0
    USER_LIST_DEBOUNCE_SEC: float = 0.3

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        s = v.strip().rstrip("/")
        if s and not s.startswith("/"):
            raise ValueError("API_PREFIX must start with '/' (e.g. /api)")
        return s

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
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
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("USERS_API_BASE_URL")
    @classmethod
    def validate_users_api_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("USERS_API_BASE_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "USERS_API_BASE_URL must use http or https (e.g. http://localhost:8000/api)"
            )
        return v.strip().rstrip("/")

    @field_validator("USERS_API_TIMEOUT_SEC")
    @classmethod
    def validate_users_api_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError(
                "USERS_API_TIMEOUT_SEC must be greater than 0 and at most 120"
            )
        return v

    @field_validator("USER_LIST_DEBOUNCE_SEC")
    @classmethod
    def validate_user_list_debounce(cls, v: float) -> float:
        if v < 0 or v > 5:
            raise ValueError("USER_LIST_DEBOUNCE_SEC must be between 0 and 5")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
