"""
Configuration management for the Account Service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

DEFAULT_JWT_SECRET = "change-this-secret-in-prod"


class Settings(BaseSettings):
    """Account Service configuration loaded from environment variables"""

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./accounts.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Token Configuration
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Password hashing work factor (pbkdf2_sha256 rounds)
    PASSWORD_HASH_ROUNDS: int = 29000

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def validate_runtime(self) -> None:
        if self.APP_ENV.lower() == "production" and self.JWT_SECRET == DEFAULT_JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set in production.")
        if not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET must not be empty.")


def get_settings() -> Settings:
    """Build settings from the environment (and .env when present)."""
    return Settings()
