"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    DATABASE_URL: str = "sqlite:///./app.db"
    APP_VERSION: str = "1.0.0"
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # JWT
    JWT_SECRET: str = "ems-api-development-secret-change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    # Default admin account created on startup
    SEED_ADMIN: bool = True
    ADMIN_EMAIL: str = "admin@company.com"
    ADMIN_PASSWORD: str = "admin123"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


def uses_default(name: str) -> bool:
    """True when a setting still holds its built-in development default."""
    return getattr(settings, name) == Settings.model_fields[name].default
