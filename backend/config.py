"""Application settings loaded from .env file."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Store (where storage/view/form/operation/domain models are kept)
    DATABASE_URL: str = "sqlite:///./schemata.db"
    DATABASE_ECHO: bool = False

    # Catalog import (target MySQL databases)
    IMPORT_DEFAULT_PORT: int = 3306
    IMPORT_CONNECT_TIMEOUT_SECONDS: int = 10

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
