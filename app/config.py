"""Application configuration using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "JATrackr API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = True

    # MongoDB (connection string usually comes from .env)
    MONGODB_CS: str = Field(default="mongodb://localhost:27017")
    MONGODB_DB_NAME: str = "jatrackr"
    MONGODB_USER_COLLECTION: str = "Users"
    MONGODB_JOBDATA_COLLECTION: str = "JobData"
    MONGODB_MAX_POOL_SIZE: int = 10
    MONGODB_MIN_POOL_SIZE: int = 0
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000
    # Off by default: username/email uniqueness is only checked by the API
    MONGODB_ENFORCE_UNIQUE_USERS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    # Monitoring
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


# Create global settings instance
settings = Settings()
