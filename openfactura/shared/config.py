"""Shared configuration management for the Open Factura client.

Settings reference:
https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from openfactura.shared.errors import ConfigurationError

PRODUCTION_URL = "https://api.haulmer.com"
SANDBOX_URL = "https://dev-api.haulmer.com"


class Settings(BaseSettings):
    """Client settings with environment variable support.

    All settings can be overridden via environment variables with the prefix
    'OPENFACTURA_'. Example: OPENFACTURA_API_KEY=928e15a2...
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENFACTURA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    api_key: str | None = Field(
        default=None,
        description="Open Factura API key (sent in the 'apikey' header)",
    )

    # Endpoint selection
    environment: Literal["sandbox", "production"] = Field(
        default="sandbox",
        description="Target environment: sandbox (dev-api) or production (api)",
    )
    api_base_url: str | None = Field(
        default=None,
        description="Override the base URL derived from the environment",
    )

    # Transport
    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
        gt=0,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def base_url(self) -> str:
        """Resolve the API base URL.

        Returns:
            The explicit override when set, otherwise the environment URL
        """
        if self.api_base_url:
            return self.api_base_url
        return PRODUCTION_URL if self.environment == "production" else SANDBOX_URL

    def validate_credentials(self) -> None:
        """Check that the settings can be used to talk to the API.

        Called lazily when a transport is built, so settings can be created
        before the API key is known.

        Raises:
            ConfigurationError: If the API key is missing or blank
        """
        if self.api_key is None or not self.api_key.strip():
            raise ConfigurationError(
                "API key is required. Set OPENFACTURA_API_KEY environment variable."
            )


def get_settings() -> Settings:
    """Factory function to get settings instance.

    Returns:
        Configured Settings instance
    """
    return Settings()
