from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when required configuration is missing or inconsistent."""


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", protected_namespaces=()
    )

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "127.0.0.1"
    port: int = 8000
    session_cookie_name: str = "session_id"
    max_sessions: int = 1000

    model_provider: str = "openai"
    model_api_key: str = ""
    model_name: str = "gpt-4o-mini"
    model_base_url: str = ""
    model_timeout_seconds: int = 60
    model_temperature: float = 0.2

    min_scan_seconds: float = 2.0
    max_upload_bytes: int = 10 * 1024 * 1024


# Providers that run without credentials.
KEYLESS_PROVIDERS = frozenset({"example", "ollama"})


def load_settings() -> Settings:
    """Load settings once at startup and fail fast on a missing credential."""
    settings = Settings()
    provider = settings.model_provider.lower()
    if provider not in KEYLESS_PROVIDERS and not settings.model_api_key.strip():
        raise ConfigurationError(
            f"MODEL_API_KEY is required for model_provider={provider}"
        )
    return settings
