"""Configuration and environment settings for Premios de la Quincena."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for Premios de la Quincena."""

    groq_api_key: str = ""
    extraction_agent: str = "groq"
    llm_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.0
    llm_max_completion_tokens: int = 4096
    llm_top_p: float = 1.0
    llm_stream: bool = True
    database_url: str = "sqlite:///quincena.db"
    featured_awards_count: int = 4
    session_cookie_name: str = "session_id"
    session_cookie_max_age_days: int = 365
    log_dir: str = "logs"
    log_file: str = "quincena.log"
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
