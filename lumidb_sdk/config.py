"""
Configuration for the LumiDB ingest client.

Values come from ``LUMIDB_*`` environment variables or a ``.env`` file;
command-line options override them.
"""

from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings

from .errors import ConfigurationError


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Client settings with validation."""

    # Service
    url: Optional[str] = None
    api_key: Optional[SecretStr] = None

    # Transport
    timeout: float = Field(300.0, gt=0.0, le=24 * 3600.0)  # seconds, per request
    chunk_size: int = Field(64 * 1024, ge=1024)
    verify_tls: bool = True
    ca_bundle: Optional[str] = None
    sign_uploads: bool = True

    # Import job polling
    poll_interval: float = Field(5.0, ge=0.0, le=3600.0)  # seconds

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_json: bool = False

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("service URL must start with http:// or https://")
        return v

    def get_config_summary(self) -> Dict[str, Any]:
        """Get a summary of configuration (without secrets)."""
        return {
            "url": self.url,
            "api_key_set": self.api_key is not None,
            "timeout": self.timeout,
            "verify_tls": self.verify_tls,
            "ca_bundle": self.ca_bundle,
            "sign_uploads": self.sign_uploads,
            "poll_interval": self.poll_interval,
            "log_level": self.log_level.value,
        }

    class Config:
        env_prefix = "LUMIDB_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance with validation."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {e}") from e
