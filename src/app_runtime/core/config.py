"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Runtime settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="RUNTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Backends
    gateway_url: str = Field(default="http://localhost:8000", description="Service gateway URL")
    orchestrator_url: str = Field(
        default="http://localhost:8000", description="App orchestrator URL"
    )
    request_timeout: float = Field(default=5.0, gt=0, description="HTTP request timeout")

    # Circuit breaker
    breaker_fail_max: int = Field(default=5, gt=0, description="Failures before opening")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Seconds before retry")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Validation
    max_message_length: int = Field(default=10_000, gt=0, description="Max request length")
    max_spec_size: int = Field(default=512 * 1024, gt=0, description="Max UI spec bytes")
    max_spec_depth: int = Field(default=20, gt=0, description="Max UI spec nesting")

    # Protocol
    max_thoughts: int = Field(default=200, gt=0, description="Thought log capacity")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
