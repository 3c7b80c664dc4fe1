"""
Application settings for savedimport.

- Defaults are intended for development use.
- For testing, override via pyproject.toml [tool.pytest.ini_options].
- For production, set environment variables to override fields.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """savedimport configuration."""

    # Saved objects store configuration
    saved_objects_url: str = Field(
        default="http://localhost:5601",
        description="Base URL of the saved objects HTTP API",
    )
    saved_objects_timeout: float = Field(
        default=30.0,
        description="Timeout for saved objects requests in seconds",
    )
    saved_objects_api_key: str | None = Field(
        default=None,
        description="API key sent as an ApiKey authorization header",
    )

    # Namespace (tenant) configuration
    default_namespace: str = Field(
        default="default",
        description="Namespace that is addressed without a /s/{namespace} prefix",
    )

    model_config = SettingsConfigDict(
        env_prefix="SAVEDIMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
