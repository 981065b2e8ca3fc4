"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """shapecheck settings loaded from SHAPECHECK_* environment variables."""

    # Assertions
    ENABLED: bool = False  # Initial state of the default assertion context

    # Logging
    LOG_LEVEL: str = "info"
    DEBUG: bool = False
    WARN_RECOMMENDED: bool = True  # Log missing recommended() values

    model_config = {"env_prefix": "SHAPECHECK_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
