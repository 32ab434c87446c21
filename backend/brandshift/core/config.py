"""Application configuration loaded from environment variables.

All configuration is via environment variables (or a local .env file).
No hardcoded URLs, ports, or credentials.
"""

from functools import lru_cache

from pydantic import Field, PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Brandshift API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")
    frontend_url: str | None = Field(
        default=None,
        description="Frontend origin allowed by CORS (all origins when unset)",
    )

    # Server
    port: int = Field(default=8000, description="Port to bind to")
    host: str = Field(default="0.0.0.0", description="Host to bind to")

    # Database
    database_url: PostgresDsn = Field(
        ...,
        description="PostgreSQL connection string",
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size")
    db_max_overflow: int = Field(default=10, description="Max overflow connections")
    db_pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    db_slow_query_threshold_ms: int = Field(
        default=100, description="Threshold for slow query warnings (ms)"
    )
    db_connect_timeout: int = Field(
        default=60, description="Connection timeout in seconds"
    )
    db_command_timeout: int = Field(
        default=60, description="Command timeout in seconds"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format: json or text")

    # OpenAI-compatible text generation
    openai_api_key: str | None = Field(
        default=None,
        description="API key for the chat-completions provider",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the chat-completions API",
    )
    openai_model: str = Field(
        default="gpt-4o",
        description="Model used for color scheme generation",
    )
    openai_timeout: float = Field(
        default=60.0, description="Generation request timeout in seconds"
    )
    openai_max_tokens: int = Field(
        default=1024, description="Maximum tokens in a generation response"
    )
    openai_temperature: float = Field(
        default=0.7, description="Sampling temperature for generation"
    )

    # Color scheme interpretation
    color_scheme_strict_validation: bool = Field(
        default=False,
        description=(
            "Reject generated color schemes that are not valid JSON objects with "
            "the required hex color keys instead of returning an empty scheme"
        ),
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
