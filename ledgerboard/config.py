from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Ledgerboard"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./ledgerboard.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    API_KEYS: Optional[str] = None
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None
    JWT_REQUIRED: bool = False
    JWT_EXPIRE_MINUTES: int = 60 * 12
    PASSWORD_PBKDF2_ROUNDS: int = 200_000

    # ==============================
    # Tenancy
    # ==============================
    DEFAULT_USER_ID: int = 1

    # ==============================
    # Business
    # ==============================
    BUSINESS_TIMEZONE: str = "Asia/Jakarta"
    BUSINESS_TYPE: str = "Indonesian Small Business"

    # ==============================
    # Recommendations
    # ==============================
    RECOMMENDER_API_URL: str = "https://api.openai.com/v1/chat/completions"
    RECOMMENDER_API_KEY: Optional[str] = None
    RECOMMENDER_MODEL: str = "gpt-4o"
    RECOMMENDER_TIMEOUT_SECONDS: int = 30
    RECOMMENDATION_HISTORY_LIMIT: int = 50


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
