"""
ZenStudent Application Settings

Configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionSettings(BaseSettings):
    """Conversation and mood ledger configuration."""

    model_config = SettingsConfigDict(env_prefix="ZEN_SESSION_")

    history_window: int = Field(default=8, ge=1, le=100, description="Prior messages sent as context")
    mood_min_score: int = Field(default=0, description="Lowest accepted mood score")
    mood_max_score: int = Field(default=5, description="Highest accepted mood score")
    mood_capacity: int = Field(default=10, ge=1, le=1000, description="Mood entries retained")
    default_language: Literal["ru", "en"] = Field(default="ru", description="Language for new profiles")

    @model_validator(mode="after")
    def validate_mood_range(self) -> "SessionSettings":
        """Mood range must not be empty."""
        if self.mood_min_score > self.mood_max_score:
            raise ValueError("mood_min_score must not exceed mood_max_score")
        return self


class CrisisSettings(BaseSettings):
    """Crisis alert configuration."""

    model_config = SettingsConfigDict(env_prefix="ZEN_CRISIS_")

    auto_dismiss_seconds: float = Field(
        default=8.0,
        gt=0,
        le=3600,
        description="Seconds before the notification banner text clears",
    )


class ExerciseSettings(BaseSettings):
    """Breathing and meditation timer configuration."""

    model_config = SettingsConfigDict(env_prefix="ZEN_EXERCISE_")

    tick_seconds: float = Field(default=1.0, gt=0, le=10, description="Length of one sequencer tick")


class OpenAISettings(BaseSettings):
    """OpenAI API configuration."""

    model_config = SettingsConfigDict(env_prefix="ZEN_OPENAI_")

    api_key: SecretStr = Field(default=SecretStr(""), description="OpenAI API key")
    model: str = Field(default="gpt-4o-mini", description="Model identifier")
    max_tokens: int = Field(default=512, ge=64, le=4096)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)


class GeminiSettings(BaseSettings):
    """Google Gemini API configuration."""

    model_config = SettingsConfigDict(env_prefix="ZEN_GEMINI_")

    api_key: SecretStr = Field(default=SecretStr(""), description="Gemini API key")
    model: str = Field(default="gemini-1.5-flash", description="Model identifier")


class StorageSettings(BaseSettings):
    """Key-value persistence configuration."""

    model_config = SettingsConfigDict(env_prefix="ZEN_STORAGE_")

    backend: Literal["memory", "sql"] = Field(default="memory", description="Key-value backend")
    url: str = Field(
        default="sqlite+aiosqlite:///./data/zenstudent.db",
        description="SQLAlchemy async URL for the sql backend",
    )


class MonitoringSettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="ZEN_SENTRY_")

    dsn: Optional[SecretStr] = Field(default=None, description="Sentry DSN; disabled when unset")
    traces_sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with ZEN_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        window = settings.session.history_window
    """

    model_config = SettingsConfigDict(
        env_prefix="ZEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # LLM provider selection
    llm_primary_provider: Literal["gemini", "openai"] = Field(
        default="gemini",
        description="Primary LLM provider; the other one is used as fallback"
    )
    llm_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Hard timeout for a single provider call"
    )

    # Nested settings
    session: SessionSettings = Field(default_factory=SessionSettings)
    crisis: CrisisSettings = Field(default_factory=CrisisSettings)
    exercise: ExerciseSettings = Field(default_factory=ExerciseSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and pass it in.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
