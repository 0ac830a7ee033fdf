"""
Runtime configuration for the RideBook backend.

All values are read from the environment (or a local .env file):
- DATABASE_URL: SQLAlchemy connection string (postgres:// is accepted)
- SQL_ECHO: log every SQL statement (default false)
- LOG_LEVEL / LOG_JSON: logging verbosity, and one JSON object per line instead of text
- SEED_SAMPLE_DATA: load the sample dataset at startup when the database is empty
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _normalize_database_url(url: str) -> str:
    """
    Normalize DATABASE_URL to a SQLAlchemy-compatible URL.

    Notes:
    - Some platforms provide 'postgres://...' which SQLAlchemy expects as
      'postgresql://...'.
    """
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


class Settings(BaseSettings):
    database_url: str = Field(default="sqlite:///./ridebook.db")
    sql_echo: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    seed_sample_data: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("database_url")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return _normalize_database_url(value)


@lru_cache
def get_settings() -> Settings:
    return Settings()
