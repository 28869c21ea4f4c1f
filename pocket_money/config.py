"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./pocket_money.db"

    # Document keys in the key-value store
    settings_key: str = "pm_settings"
    state_key: str = "pm_state"
    legacy_history_key: str = "pm_history"

    # Service
    service_name: str = "pocket-money"
    log_level: str = "INFO"

    # Budgeting
    default_currency: str = "$"
    timezone: str = "UTC"  # Calendar used for "today" and weekend detection


settings = Settings()
