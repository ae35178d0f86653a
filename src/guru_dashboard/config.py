"""Configuration management for the guru dashboard."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.llm import ConfigurationError


OPENROUTER_CHAT_URL = "https://openrouter.ai/api/v1/chat/completions"


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    url: str = Field(..., validation_alias="DATABASE_URL")
    pool_min_size: int = Field(1, validation_alias="DB_POOL_MIN_SIZE")
    pool_max_size: int = Field(10, validation_alias="DB_POOL_MAX_SIZE")
    # Supabase's transaction pooler does not support prepared statements
    statement_cache_size: int = Field(0, validation_alias="DB_STATEMENT_CACHE_SIZE")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        """Validate database URL format."""
        if not v or not v.startswith(("postgresql://", "postgres://")):
            raise ValueError("DATABASE_URL must be a valid PostgreSQL connection string")
        if "[PASSWORD]" in v or "[YOUR-PASSWORD]" in v:
            raise ValueError("DATABASE_URL contains placeholder password - please set actual password")
        return v


class OpenRouterConfig(BaseSettings):
    """OpenRouter credential and request headers used by the relay."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_key: Optional[str] = Field(None, validation_alias="OPENROUTER_API_KEY")
    base_url: str = Field(OPENROUTER_CHAT_URL, validation_alias="OPENROUTER_BASE_URL")
    referer: str = Field("http://localhost:3000", validation_alias="OPENROUTER_REFERER")
    title: str = Field("Guru Dashboard AI Evaluator", validation_alias="OPENROUTER_TITLE")

    def require_api_key(self) -> str:
        """Return the credential or raise ConfigurationError when it is unset."""
        if not self.api_key:
            raise ConfigurationError("Missing OPENROUTER_API_KEY")
        return self.api_key


class RelayConfig(BaseSettings):
    """Where the relay listens and where the dashboard reaches it."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field("127.0.0.1", validation_alias="RELAY_HOST")
    port: int = Field(3000, validation_alias="RELAY_PORT")
    url: str = Field("http://localhost:3000/api/ai-analyze", validation_alias="RELAY_URL")


class AppConfig(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    name: str = Field("guru-dashboard", validation_alias="APP_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    debug: bool = Field(False, validation_alias="DEBUG")


class Settings(BaseSettings):
    """
    Main application settings.

    The database group is loaded separately (see ``DatabaseSettings``) so that
    commands which never touch the data store, such as the relay, start
    without a DATABASE_URL.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openrouter: OpenRouterConfig = Field(default_factory=OpenRouterConfig)
    relay: RelayConfig = Field(default_factory=RelayConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment."""
        return cls()
