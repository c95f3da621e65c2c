"""Configuration management for tasktrack."""

from datetime import time
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="tasktrack.db", description="Path to the SQLite database file")

    # Bearer Token Configuration
    secret_key: str = Field(default="dev-secret-key-change-me", description="Secret used to sign bearer tokens")
    token_max_age_seconds: int = Field(default=12 * 60 * 60, description="Maximum accepted bearer token age")

    # Due Date Configuration
    timezone: str = Field(default="UTC", description="IANA zone treated as local time when composing due dates")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    environment: str = Field(default="development", description="Deployment environment name")

    @property
    def is_production(self) -> bool:
        """Return True when running in the production environment."""
        return self.environment.lower() == "production"

    @property
    def tzinfo(self) -> ZoneInfo:
        """Return the configured local zone."""
        return ZoneInfo(self.timezone)

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_CREATED: int = 201
    HTTP_BAD_REQUEST: int = 400
    HTTP_UNAUTHORIZED: int = 401
    HTTP_NOT_FOUND: int = 404
    HTTP_SERVER_ERROR: int = 500

    # Due dates
    DEFAULT_DUE_TIME: time = time(23, 59)

    # Bearer tokens
    TOKEN_SALT: str = "tasktrack-auth"

    # Service metadata
    SERVICE_NAME: str = "tasktrack"
    SERVICE_VERSION: str = "0.1.0"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
