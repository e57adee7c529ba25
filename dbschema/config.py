"""Application settings loaded from .env file."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # API
    CORS_ORIGINS: str = "http://localhost:5173"

    # Introspection
    POSTGRES_SCHEMA: str = "public"

    # DDL export
    MYSQL_TABLE_OPTIONS: str = "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci"
    EXPORT_TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
