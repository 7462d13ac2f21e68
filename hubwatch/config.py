"""Configuration loading for the hub watcher.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Convert settings into the core's WatcherConfig and RuntimeEnvironment
- Support per-environment hosts (development, test, staging, production)
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hubwatch.core.errors import ConfigurationError
from hubwatch.core.models import (
    DEFAULT_ENVIRONMENT,
    RuntimeEnvironment,
    WatcherConfig,
    host_setting,
)


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv. Host values accept either a plain
    URL or a JSON object keyed by environment name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Runtime environment
    environment: str = Field(
        default=DEFAULT_ENVIRONMENT,
        description="Deployment environment name",
    )
    ip: str = Field(
        default="",
        description="Override for the local IP address used in callback URLs",
    )
    user: str = Field(
        default="",
        description="Operating user, used to name non-production webhooks",
    )

    # Hub webhook configuration
    webhook_name: str = Field(
        default="",
        description="Webhook name prefix",
    )
    hub_host: str | dict[str, str] = Field(
        default="",
        description="Hub base URL, or JSON object of URLs keyed by environment",
    )
    app_host: str | dict[str, str] = Field(
        default="",
        description="Application base URL, or JSON object keyed by environment",
    )
    hub_parallel_calls: int = Field(
        default=1,
        description="Parallel calls the hub may make to the callback URL",
    )
    start_item: str = Field(
        default="",
        description="Item URI new webhooks start after (optional)",
    )
    hub_client_options: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra keyword arguments for the hub HTTP client",
    )
    hub_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout in seconds for hub requests",
    )

    # Callback server configuration
    listen_host: str = Field(
        default="0.0.0.0",
        description="Host to listen on for hub callbacks",
    )
    listen_port: int = Field(
        default=3000,
        description="Port to listen on for hub callbacks",
    )
    watch_channels: list[str] | str = Field(
        default_factory=list,
        description="Channels to watch (JSON list or comma-separated)",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalize the environment name, defaulting when blank."""
        v = v.strip().lower()
        return v or DEFAULT_ENVIRONMENT

    @field_validator("hub_parallel_calls")
    @classmethod
    def validate_parallel_calls(cls, v: int) -> int:
        """Ensure parallel calls is positive."""
        if v <= 0:
            raise ValueError("hub_parallel_calls must be positive")
        return v

    @field_validator("hub_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure hub timeout is positive."""
        if v <= 0:
            raise ValueError("hub_timeout_seconds must be positive")
        return v

    @field_validator("listen_port")
    @classmethod
    def validate_listen_port(cls, v: int) -> int:
        """Ensure listen port is in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("listen_port must be between 1 and 65535")
        return v

    @field_validator("watch_channels")
    @classmethod
    def split_watch_channels(cls, v: list[str] | str) -> list[str]:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            v = v.split(",")
        return [channel.strip() for channel in v if channel.strip()]

    def runtime_environment(self) -> RuntimeEnvironment:
        """Build the runtime environment from settings."""
        return RuntimeEnvironment(
            name=self.environment,
            user=self.user or None,
            ip_override=self.ip or None,
        )

    def watcher_config(self) -> WatcherConfig:
        """Build the watcher configuration from settings.

        Raises:
            ConfigurationError: If a required value is missing.
        """
        if not self.hub_host:
            raise ConfigurationError('HubWatcher config: Missing "hub_host"')
        if not self.app_host:
            raise ConfigurationError('HubWatcher config: Missing "app_host"')

        return WatcherConfig(
            webhook_name=self.webhook_name,
            hub_host=host_setting(self.hub_host),
            app_host=host_setting(self.app_host),
            hub_parallel_calls=self.hub_parallel_calls,
            start_item=self.start_item or None,
            client_options={"timeout": self.hub_timeout_seconds, **self.hub_client_options},
        )


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
