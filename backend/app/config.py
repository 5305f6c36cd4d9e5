"""
Application configuration
Settings are read from environment variables and an optional .env file.
"""
from typing import List, Literal
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "PMS Rate Console"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./rates.db"

    # JWT
    SECRET_KEY: str = "rates-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Pricing
    DEFAULT_CURRENCY: str = "USD"
    # flag: report negative rates as-is with a warning
    # clamp: show 0.00, keep the warning
    # reject: refuse the quote
    NEGATIVE_RATE_POLICY: Literal["flag", "clamp", "reject"] = "flag"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 200

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
