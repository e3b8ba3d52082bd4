"""Configuration management for link shorter."""

import os
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    database_path: str = Field(
        default="link_shorter.db",
        description="SQLite database file holding shorters and tokens"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=1566,
        description="Port to listen on"
    )

    # Shorter settings
    random_path_length: int = Field(
        default=8,
        ge=1,
        description="Length of generated paths when the caller gives none"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config(**overrides) -> Config:
    """Load configuration from environment.

    The dotenv file defaults to ``.env``; ``DOT`` points at another one.
    """
    env_file = os.getenv("DOT", ".env")
    return Config(_env_file=env_file, **overrides)
