from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, blank_to_none


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    # DB_URL is only required when a connection is opened (DatabaseConnection.connect),
    # so importing the package never fails on a missing variable.
    DB_URL: str | None = None
    DB_NAME: str = "app"

    # Test database configuration
    TEST_DB_NAME: str | None = None
    TESTING: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/doclayer")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    LOG_USE_QUEUE: bool = False
    LOG_QUEUE_MAX_SIZE: int = 0  # 0 -> unbounded
    LOG_QUEUE_BLOCKING: bool = False
    ENABLE_DRIVER_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_NAME(self) -> str:
        """
        Name of the database used when DB_URL does not name one.

        With `TESTING=True` and `TEST_DB_NAME` set, the test database is preferred so
        test runs never touch the regular database.
        """
        if self.TESTING and self.TEST_DB_NAME:
            return self.TEST_DB_NAME
        return self.DB_NAME

    # --- Validators ---
    @field_validator("DB_URL", mode="before")
    @classmethod
    def normalize_db_url(cls, v: str | None) -> str | None:
        """
        Treat an empty or whitespace-only DB_URL (e.g. `DB_URL=` in .env) as missing.
        """
        return blank_to_none(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase; the logging module expects "DEBUG", "INFO", ...
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() always returns the same settings from the environment, so it is cached.
# Tests that change the environment call get_settings.cache_clear().
@lru_cache()
def get_settings() -> Settings:
    return Settings()
