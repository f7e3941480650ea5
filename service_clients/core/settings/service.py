"""Backend service connection settings.

Environment variables use SERVICE_ prefix.
Example: SERVICE_APP_ID=todo-abcde, SERVICE_ACCESS_TOKEN=eyJhbGciOi...
"""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """Connection and credential configuration for the backend application.

    Every integration client built from these settings shares one
    authenticated session.

    Environment variables use SERVICE_ prefix.
    Example: SERVICE_BASE_URL=https://backend.example.com, SERVICE_TIMEOUT=15
    """

    base_url: str = Field(
        default="https://stitch.mongodb.com",
        min_length=1,
        description="Base URL of the backend hosting the application",
    )
    app_id: str = Field(
        default="",
        max_length=255,
        description="Client application identifier",
    )

    # Credentials
    access_token: SecretStr | None = Field(
        default=None,
        description="Bearer access token attached to every function call",
    )
    refresh_token: SecretStr | None = Field(
        default=None,
        description="Refresh token used to obtain a new access token",
    )

    # Transport
    timeout: float = Field(
        default=30.0,
        ge=0.1,
        le=300.0,
        description="Request timeout in seconds; expiry surfaces as TransportError",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify TLS certificates of the backend",
    )
    max_connections: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum pooled HTTP connections",
    )
    max_keepalive_connections: int = Field(
        default=20,
        ge=0,
        le=1000,
        description="Maximum idle keep-alive connections",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so paths can be appended safely."""
        return v.rstrip("/")

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_configured(self) -> bool:
        """Check if enough is configured to issue authenticated calls."""
        return bool(self.app_id) and self.access_token is not None

    @property
    def endpoint(self) -> str:
        """Endpoint identity of the configured application."""
        return f"{self.base_url}/app/{self.app_id}"
