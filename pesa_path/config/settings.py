"""
Configuration Management for Pesa Path

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here so every external dependency
(Firestore, Gemini) is visible in one place and validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirebaseSettings(BaseSettings):
    """Firestore connection configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    project_id: str = Field(
        ...,
        description="Google Cloud / Firebase project ID"
    )
    credentials_path: str = Field(
        ...,
        description="Path to the service account credentials JSON"
    )
    database: str = Field(
        default="(default)",
        description="Firestore database name"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Firebase credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


class GeminiSettings(BaseSettings):
    """Gemini LLM configuration used by the AI flows."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    api_key: str = Field(
        ...,
        description="Gemini API key"
    )
    model_name: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model to use"
    )
    max_tokens: int = Field(
        default=2048,
        ge=100,
        le=8192,
        description="Maximum tokens in response"
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Model temperature"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Money
    currency: str = Field(
        default="UGX",
        description="Currency code shown next to every amount"
    )
    timezone: str = Field(
        default="Africa/Kampala",
        description="Timezone used to bucket transactions into days and periods"
    )

    # SACCOs
    min_sacco_deposit: int = Field(
        default=1000,
        ge=1,
        description="Smallest accepted SACCO deposit"
    )
    default_sacco_goal: int = Field(
        default=1_000_000,
        ge=1,
        description="Goal pre-filled on the create SACCO form"
    )
    member_lookup_limit: int = Field(
        default=30,
        ge=1,
        le=30,
        description="Firestore 'in' queries accept at most 30 ids"
    )

    # Dashboard
    recent_transactions_limit: int = Field(
        default=5,
        ge=1,
        description="Rows in the recent transactions card"
    )
    chart_days: int = Field(
        default=7,
        ge=1,
        le=31,
        description="Days shown in the deposits vs. withdrawals chart"
    )
    overspending_window_days: int = Field(
        default=30,
        ge=1,
        description="Only transactions newer than this are sent to the overspending check"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def firebase(self) -> FirebaseSettings:
        return FirebaseSettings()

    @property
    def gemini(self) -> GeminiSettings:
        return GeminiSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    `<name>_error` entry describing each failure.
    """
    results = {}

    settings = get_settings()

    for name in ("firebase", "gemini", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
