"""Configuration management for hacker-shell."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .line_reader import DEFAULT_LINE_BUFFER_SIZE
from .logging_utils import configure_logging
from .tokenizer import DEFAULT_TOKEN_BUFFER_SIZE


class Settings(BaseSettings):
    """Shell settings, read from HSH_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="HSH_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    prompt: str = Field(default="HS> ", description="Literal prompt printed before each read")

    # Buffer sizing
    line_buffer_size: int = Field(
        default=DEFAULT_LINE_BUFFER_SIZE, gt=0, description="Line buffer initial capacity and growth increment"
    )
    token_buffer_size: int = Field(
        default=DEFAULT_TOKEN_BUFFER_SIZE, gt=0, description="Token array initial capacity and growth increment"
    )

    # Dispatch
    unknown_command: Literal["help", "launch"] = Field(
        default="help", description="What to do with non-builtin commands"
    )

    # Logging Configuration
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


def get_settings(**overrides) -> Settings:
    """Get shell settings.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        Settings instance
    """
    settings = Settings(**{key: value for key, value in overrides.items() if value is not None})

    configure_logging(settings.log_level)

    return settings
