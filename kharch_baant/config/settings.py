"""
Runtime Settings for the Kharch Baant bootstrap layer

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: These settings describe how the bootstrap layer itself runs
(execution mode, routing hints, logging). The application keys that get
validated live in the environment snapshot and are NOT fields here - a
missing Supabase key must be reported, not crash settings loading.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class ExecutionMode(str, Enum):
    """Execution mode signal used by validation and failure reporting."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class RuntimeSettings(BaseSettings):
    """
    Settings for the bootstrap layer.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment ('production' enables production checks)"
    )
    env_file: str = Field(
        default=".env",
        description="Dotenv file merged into the environment snapshot"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Identity provider routing hints
    sign_in_url: str = Field(
        default="/sign-in",
        description="Route of the sign-in entry point"
    )
    sign_up_url: str = Field(
        default="/sign-up",
        description="Route of the sign-up entry point"
    )

    @field_validator("app_environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("sign_in_url", "sign_up_url")
    @classmethod
    def validate_route(cls, v: str) -> str:
        route = v.strip()
        if not route.startswith("/"):
            raise ValueError("Routes must start with '/'")
        return route

    @property
    def execution_mode(self) -> ExecutionMode:
        if self.app_environment == ExecutionMode.PRODUCTION.value:
            return ExecutionMode.PRODUCTION
        return ExecutionMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.execution_mode is ExecutionMode.PRODUCTION


def config_load_settings() -> RuntimeSettings:
    """
    Load and validate runtime settings from environment and dotenv.

    Raises:
        SettingsLoadError: If a setting is present but invalid.
    """
    try:
        return RuntimeSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Runtime settings validation failed. Update .env or environment variables. Details: {error}"
        ) from error


@lru_cache()
def get_settings() -> RuntimeSettings:
    """
    Get runtime settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return config_load_settings()
