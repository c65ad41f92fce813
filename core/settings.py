from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, PostgresDsn, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=False)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)


class PgDbSettings(CustomSettings):
    POSTGRES_ENGINE: str = Field(default="postgresql+asyncpg")
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: SecretStr = Field(default="postgres")
    POSTGRES_DB: str = Field(default="messaging")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: PostgresDsn | str = Field(default="")

    @model_validator(mode="before")
    def validate_postgres_dsn(cls, data: dict):
        if isinstance(data, dict) and not data.get("DATABASE_URL"):
            _built_uri = PostgresDsn.build(
                scheme=data.get("POSTGRES_ENGINE", "postgresql+asyncpg"),
                username=data.get("POSTGRES_USER", "postgres"),
                password=data.get("POSTGRES_PASSWORD", "postgres"),
                host=data.get("POSTGRES_HOST", "localhost"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=data.get("POSTGRES_DB", "messaging"),
            ).unicode_string()
            data["DATABASE_URL"] = _built_uri
        return data


DEFAULT_SESSION_SECRET_KEY = "key1"


class SessionSettings(CustomSettings):
    """Cookie session configuration.

    Set via env vars:
    - SESSION_COOKIE_NAME
    - SESSION_SECRET_KEY
    - SESSION_MAX_AGE (seconds; unset keeps the cookie for the browser session)
    - SESSION_HTTPS_ONLY
    """

    SESSION_COOKIE_NAME: str = Field(default="session")
    SESSION_SECRET_KEY: SecretStr = Field(default=DEFAULT_SESSION_SECRET_KEY)
    SESSION_MAX_AGE: Optional[int] = Field(default=None)
    SESSION_HTTPS_ONLY: bool = Field(default=False)


class MessagingSettings(CustomSettings):
    """Tuning for conversation listing.

    Set via env vars:
    - MESSAGING_ENRICHMENT_CONCURRENCY
    """

    MESSAGING_ENRICHMENT_CONCURRENCY: int = Field(default=8, ge=1)


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    DATABASE: PgDbSettings = Field(default_factory=PgDbSettings)
    SESSION: SessionSettings = Field(default_factory=SessionSettings)
    MESSAGING: MessagingSettings = Field(default_factory=MessagingSettings)

    @model_validator(mode="after")
    def validate_session_secret(self) -> "Settings":
        if (
            self.APP.ENVIRONMENT == "prod"
            and self.SESSION.SESSION_SECRET_KEY.get_secret_value() == DEFAULT_SESSION_SECRET_KEY
        ):
            raise ValueError("SESSION_SECRET_KEY must be set when ENVIRONMENT is prod")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()
