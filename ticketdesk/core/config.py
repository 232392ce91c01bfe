# ticketdesk/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db")
    APP_NAME: str = "Ticketdesk"
    APP_DESC: str = "Support tickets behind cookie sessions"
    APP_VERSION: str = "1.0.0"

    # Shared HS256 secret; rotating it logs everybody out
    JWT_SECRET: str = Field(..., min_length=16)
    SESSION_COOKIE_NAME: str = "ticketdesk_session"
    SESSION_TTL_DAYS: int = Field(default=7, gt=0)
    COOKIE_SECURE: bool = True

    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    LOG_LEVEL: str = "INFO"
    TELEMETRY_LOG_PATH: str | None = None

    # Comma separated list, "*" when unset
    CORS_ORIGINS: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
