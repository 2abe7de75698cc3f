"""All settings, loaded from the environment and the .env file."""
from functools import lru_cache

from pydantic_settings import BaseSettings

APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    # App
    app_url: str = "http://localhost:5000"
    port: int = 5000
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Backing data/auth service (Supabase)
    supabase_url: str = ""
    supabase_key: str = ""
    request_timeout: float = 30

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
