"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    DATABASE_URL: str = "sqlite:///./enertrack.db"
    DATABASE_ECHO: bool = False
    APP_NAME: str = "EnerTrack Device History Service"
    SESSION_COOKIE_NAME: str = "elektronik_rumah_session"
    SESSION_SECRET_KEY: str = "change-me"
    SESSION_MAX_AGE: int = 14 * 24 * 60 * 60
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
