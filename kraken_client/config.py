import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Kraken API credentials (secret is the base64 text shown by Kraken)
    kraken_api_key: str = ""
    kraken_api_secret: str = ""

    # Transport
    kraken_api_url: str = "https://api.kraken.com"
    kraken_request_timeout: float = 30.0  # Seconds, used when we open our own httpx client

    # Logging
    log_level: str = "INFO"

    @field_validator("kraken_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths always start with '/', so the origin must not end with one"""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def has_credentials(self) -> bool:
        return bool(self.kraken_api_key and self.kraken_api_secret)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings from the environment, loaded on first use"""
    return Settings()
