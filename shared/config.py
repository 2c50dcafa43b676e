"""
Shared configuration management for the parameter cache.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """Environment-backed settings for processes embedding the cache."""

    model_config = SettingsConfigDict(
        env_prefix="PARAMETER_CACHE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Cache policy
    default_expiry_seconds: float = Field(default=30.0)
    default_decrypt: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="info")

    # Parameter store client
    aws_region: Optional[str] = Field(default=None)
    ssm_endpoint_url: Optional[str] = Field(default=None)


def get_config() -> CacheSettings:
    """Get cache settings from the environment."""
    return CacheSettings()
