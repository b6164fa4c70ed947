"""
Configuration settings for the roster pager.

Uses Pydantic Settings to load environment variables for the record source
(HTTP API or Postgres), page size, and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Paging
    children_per_page: int = Field(10, alias="CHILDREN_PER_PAGE", gt=0)

    # Record source
    source: Literal["http", "postgres", "memory"] = Field("http", alias="ROSTER_SOURCE")
    api_base_url: str = Field("http://localhost:5000", alias="API_BASE_URL")
    api_children_path: str = Field("childs", alias="API_CHILDREN_PATH")
    api_timeout_seconds: float = Field(10.0, alias="API_TIMEOUT_SECONDS")

    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("roster", alias="DB_NAME")
    db_connect_retries: int = Field(3, alias="DB_CONNECT_RETRIES")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
