from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, read from environment variables (and .env file).
    """

    DATABASE_URL: str = "sqlite:///./tasks.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    APP_TITLE: str = "Taskboard API"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
