"""Application configuration using Pydantic Settings."""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    GEMINI = "gemini"
    OPENAI = "openai"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "meal_tracker"

    # LLM Provider Selection
    llm_provider: LLMProvider = LLMProvider.GEMINI

    # Google Gemini Configuration
    google_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    models_api_url: str = "https://generativelanguage.googleapis.com/v1beta/models"

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # LLM Settings
    llm_temperature: float = 0.7
    llm_timeout_seconds: float = 60.0

    # Suggestion dialogue (0 = no cap on clarifying questions)
    suggestion_max_questions: int = 0

    # Nutrition defaults
    default_weekly_target: int = 14000
    default_protein_goal: int = 150
    timezone: str = "UTC"
    week_starts_on: int = 0  # 0 = Sunday, 1 = Monday

    # App
    debug: bool = False
    app_name: str = "Meal Tracker API"
    api_version: str = "1.0.0"

    @property
    def default_model(self) -> str:
        """Model identifier used when the user has not picked one."""
        if self.llm_provider == LLMProvider.GEMINI:
            return self.gemini_model
        return self.openai_model

    @property
    def is_llm_configured(self) -> bool:
        """Check if the selected LLM provider is configured."""
        if self.llm_provider == LLMProvider.GEMINI:
            return bool(self.google_api_key)
        elif self.llm_provider == LLMProvider.OPENAI:
            return bool(self.openai_api_key)
        return False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
