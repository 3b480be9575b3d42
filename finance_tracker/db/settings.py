from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Personal Finance Tracker"
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/finance"
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    log_level: str = "INFO"
    default_trend_months: int = 6
    recent_transactions_limit: int = 5


@lru_cache
def get_settings() -> Settings:
    return Settings()
