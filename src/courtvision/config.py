"""
Configuration for CourtVision.

Central place to configure:
- Gemini endpoint, credentials and model id (used by `GeminiClient`)
- Backend host/port and the base URL the Streamlit UI talks to
- Timing of the cosmetic progress narration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COURTVISION_GEMINI__",
        populate_by_name=True,
        env_file=".env",
        extra="ignore",
    )

    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    api_key: str = Field(
        "",
        validation_alias=AliasChoices("COURTVISION_GEMINI__API_KEY", "GEMINI_API_KEY", "API_KEY"),
    )
    model: str = "gemini-3-flash-preview"
    timeout_s: float = 60.0


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COURTVISION_",
        env_file=".env",
        extra="ignore",
    )

    # Base URL where the FastAPI app is running (used by the UI).
    api_base_url: str = "http://localhost:8000"
    host: str = "0.0.0.0"
    port: int = 8000

    # Bounds for the random pause before each narrated step, in seconds.
    narrator_min_delay_s: float = 0.7
    narrator_max_delay_s: float = 1.2

    # Task statuses kept in memory for polling; oldest evicted first.
    max_tasks: int = 100

    log_level: str = "INFO"

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)


settings = Settings()
