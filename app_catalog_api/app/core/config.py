"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for every field except
the document store connection string, which has no sensible default:
``DATABASE_URL`` (or the legacy ``MONGODB_URI``) must be set before the
application starts, otherwise store construction fails with
``ConfigurationError`` and the process refuses to serve requests.
"""

import os
from dataclasses import dataclass


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "App Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Connection string for the document store.  ``mongodb://`` and
    # ``mongodb+srv://`` URLs select MongoDB; ``sqlite:///<path>`` or a
    # bare file path selects the embedded SQLite store.
    database_url: str = os.getenv("DATABASE_URL", os.getenv("MONGODB_URI", ""))

    # Database name used when the connection string points at MongoDB.
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "app_catalog")

    # Comma‑separated list of origins allowed by CORS.  ``*`` allows all.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    def require_database_url(self) -> str:
        """Return the store connection string or raise ``ConfigurationError``."""
        if not self.database_url:
            raise ConfigurationError(
                "DATABASE_URL (or MONGODB_URI) is not defined in environment variables"
            )
        return self.database_url

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes its defaults when this module is imported, environment
# variables (or a ``.env`` file) should be loaded before importing it.
settings = Settings()
