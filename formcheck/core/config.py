from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Record store
    DATABASE_URL: str = "sqlite:///./formcheck.db"

    # Error store
    ERROR_KEY_PREFIX: str = "validator_error_"

    # MX lookups
    DNS_TIMEOUT: float = 2.0    # Per-nameserver timeout
    DNS_LIFETIME: float = 5.0   # Total time budget for one query
    DNS_NAMESERVERS: list[str] = []  # Empty means use the system resolver config

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)
    LOG_SQL: bool = False   # Enable SQLAlchemy query logging

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
