"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Vocalize application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive). Credentials
    are ``SecretStr`` so they never show up in reprs or log lines.

    Attributes:
        llm_provider: Text-generation backend ("openai", "claude" or "ollama").
        stt_provider: Speech-to-text backend ("google" or "whisper").
        recording_time_limit: Seconds after which a recording stops on its own.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- LLM Provider ---
    # Rates transcripts against the rubric and writes improvement suggestions
    llm_provider: str = "openai"
    llm_temperature: float = 0.7  # Suggestions; ratings always use 0.1

    # OpenAI settings
    openai_api_key: SecretStr = SecretStr("")  # Required when llm_provider="openai"
    openai_model: str = "gpt-3.5-turbo"

    # Claude (Anthropic API) settings
    claude_api_key: SecretStr = SecretStr("")  # Required when llm_provider="claude"
    claude_model: str = "claude-sonnet-4-20250514"

    # Ollama (local LLM) settings
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # --- Speech-to-text ---
    stt_provider: str = "google"

    # Google Cloud Speech credentials: service account fields or an API key.
    # When all are empty, Application Default Credentials are used.
    google_project_id: str = ""
    google_client_email: str = ""
    google_private_key: SecretStr = SecretStr("")
    google_api_key: SecretStr = SecretStr("")

    # Recognition config for browser-recorded clips
    speech_encoding: str = "WEBM_OPUS"
    speech_sample_rate: int = 48000
    speech_language_code: str = "en-US"

    # faster-whisper settings (stt_provider="whisper")
    whisper_model: str = "base"  # Model size: tiny, base, small, medium, large-v3

    # --- Recording ---
    recording_time_limit: float | None = 30.0  # Seconds; None or 0 disables the limit

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]

    # --- UI ---
    api_base_url: str = "http://localhost:8000"  # Backend URL used by the Streamlit UI

    @field_validator("recording_time_limit", mode="before")
    @classmethod
    def _blank_time_limit_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
