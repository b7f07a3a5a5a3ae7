"""
Client settings using Pydantic BaseSettings.

Minimal configuration management with environment variable support.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_API_ROOT = "https://api.jikan.moe"
DEFAULT_API_VERSION = 3


class Settings(BaseSettings):
    """Client configuration settings."""

    # Jikan API configuration
    api_root: str = Field(default=DEFAULT_API_ROOT, description="Jikan API root URL")
    api_version: int = Field(
        default=DEFAULT_API_VERSION, gt=0, description="Jikan API version"
    )

    # HTTP client configuration
    http_timeout: float = Field(
        default=30, gt=0, description="HTTP request timeout in seconds"
    )
    user_agent: str = Field(
        default="jikanio/0.1.0", description="User-Agent header sent with requests"
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")

    model_config = {
        "env_prefix": "JIKANIO_",
        "env_file": ".env",
        "case_sensitive": False,
    }


@lru_cache
def get_settings() -> Settings:
    """Get the shared settings instance."""
    return Settings()
