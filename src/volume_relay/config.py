from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Runtime mode – tracebacks are only returned to clients in development
    environment: Literal["development", "production", "test"] = "production"

    # Outbound upload settings (seconds, None disables the timeout)
    upstream_timeout: float | None = 300.0

    # CORS settings
    cors_allow_origin: str = "*"
    cors_allow_methods: str = "POST,OPTIONS"
    cors_allow_headers: str = "Content-Type"

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def expose_error_traces(self) -> bool:
        return self.environment == "development"

    @property
    def cors_methods_list(self) -> list[str]:
        """Parse CORS methods from comma-separated string."""
        return [method.strip().upper() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        return [header.strip() for header in self.cors_allow_headers.split(",")]

    @property
    def cors_headers(self) -> dict[str, str]:
        """Headers attached to every response of the upload endpoint."""
        return {
            "Access-Control-Allow-Origin": self.cors_allow_origin,
            "Access-Control-Allow-Methods": ", ".join(self.cors_methods_list),
            "Access-Control-Allow-Headers": ", ".join(self.cors_headers_list),
        }


# Global settings instance
settings = Settings()

# ──────────────────────────────────────────────
# Remote Files API
# ──────────────────────────────────────────────
FILES_API_PREFIX = "/api/2.0/fs/files"
DEFAULT_FILE_NAME = "upload"
REQUIRED_FIELDS: tuple[str, ...] = (
    "file",
    "workspace_url",
    "databricks_token",
    "catalog_path",
)
