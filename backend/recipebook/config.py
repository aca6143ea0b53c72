"""
RecipeBook Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again during app startup.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Environment ───────────────────────────────────────────────────────
    # What: Deployment environment name (development, staging, production)
    # The destructive test endpoints are never mounted when this is "production".
    app_env: str = Field(default="development")

    # ── Firebase ──────────────────────────────────────────────────────────
    # What: Database connection string handed to firebase_admin as `databaseURL`
    database_url: str = Field(
        default="",
        description="Firebase database URL supplied at process startup",
    )

    # What: Google Cloud project hosting Auth and Firestore
    # Empty: resolved from Application Default Credentials / GOOGLE_CLOUD_PROJECT
    firebase_project_id: str = Field(default="")

    # What: Path to a service account JSON file
    # Empty: use Application Default Credentials (Cloud Run, emulator, gcloud login)
    firebase_credentials_file: str = Field(default="")

    # What: Firestore collection names for the two record types
    users_collection: str = Field(default="users")
    recipes_collection: str = Field(default="recipes")

    # ── Test-only surface ─────────────────────────────────────────────────
    # What: Mounts POST /delete_users, which removes EVERY account
    # Ignored (route stays unmounted) when app_env == "production"
    enable_test_endpoints: bool = Field(default=False)

    # ── CORS ──────────────────────────────────────────────────────────────
    # What: Allowed origins for cross-origin requests
    # Default "*": the API is called from browser and mobile clients on any origin
    # Format: Comma-separated URLs (parsed by the property below)
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def test_endpoints_enabled(self) -> bool:
        """True only when the flag is set AND we are not in production."""
        return self.enable_test_endpoints and self.app_env.lower() != "production"

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # What: Controls verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the deployment is configured coherently.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises a single ValueError listing them.
        """
        errors = []
        is_production = self.app_env.lower() == "production"
        if is_production and self.enable_test_endpoints:
            errors.append(
                "ENABLE_TEST_ENDPOINTS is set in production. "
                "POST /delete_users will NOT be mounted; unset the flag."
            )
        if is_production and not (self.firebase_project_id or self.firebase_credentials_file):
            errors.append(
                "Neither FIREBASE_PROJECT_ID nor FIREBASE_CREDENTIALS_FILE is set. "
                "Application Default Credentials must provide the project."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
