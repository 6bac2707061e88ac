"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- Defaults to SQLite (file-based) so the mapping survives restarts
- Storage backend is selected here, never hard-coded in the registry
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["EnvSettingsOptions", "Settings", "StorageBackend", "settings"]


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class StorageBackend(str, Enum):
    """Available URL store implementations."""
    sqlite = "sqlite"
    json = "json"
    memory = "memory"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )

    # Storage Configuration
    STORAGE_BACKEND: StorageBackend = Field(
        default=StorageBackend.sqlite,
        description="Which URL store to use: sqlite, json or memory"
    )
    # For SQLite: sqlite+aiosqlite:///./urlshortener.db (default)
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./urlshortener.db",
        description="Database connection string used by the sqlite backend"
    )
    DATA_FILE: Path = Field(
        default=Path("./public/data.json"),
        description="JSON file used by the json backend (created empty if missing)"
    )

    # Short Code Generation
    MAX_CODE_ATTEMPTS: int = Field(
        default=100,
        gt=0,
        description="Random draws allowed before giving up on a free short code"
    )
    CODE_RANGE_MULTIPLIER: int = Field(
        default=1000,
        gt=0,
        description="Upper bound of the code range is max(multiplier, entries * multiplier)"
    )

    # Reachability Check
    CHECK_REACHABILITY: bool = Field(
        default=True,
        description="Resolve the hostname before registering a URL"
    )
    DNS_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for DNS resolution before rejecting the URL"
    )

    # Application Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level"
    )
    CORS_ORIGINS: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware"
    )


settings = Settings()
