from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(str, Enum):
    DEV = "dev"
    HML = "hml"
    PROD = "prod"


class Settings(BaseSettings):
    APP_ENV: Env = Env.DEV
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./students.db"

    SESSION_SECRET: str = "dev-change-me"
    SESSION_COOKIE: str = "students_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7  # 7 days

    # In prod, keep cookies secure-only
    SECURE_COOKIES: bool = False

    # Anti-forgery token check on every mutating POST
    CSRF_ENABLED: bool = True

    ALLOWED_HOSTS: str = "localhost,127.0.0.1"

    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# global instance
settings = Settings()
