"""Application settings loaded from the environment.

Values come from environment variables, with a local .env file loaded first
by python-dotenv. Invalid values fail fast when settings are loaded.
"""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from models.timezones import resolve_zone

ENV_PREFIX = "CALENDAR_"

# Environment variable suffix -> Settings field
ENV_FIELDS = {
    "DEFAULT_NAME": "default_calendar_name",
    "DEFAULT_TIMEZONE": "default_timezone",
    "EXPORT_DIR": "export_dir",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Runtime configuration for the calendar service.

    Args:
        default_calendar_name: Calendar created and activated at startup;
            empty disables it.
        default_timezone: Zone of the default calendar.
        export_dir: Directory export files are written into.
        log_level: Root log level name.
    """

    default_calendar_name: str = Field(default="Default", description="Startup calendar name")
    default_timezone: str = Field(default="UTC", description="Startup calendar zone")
    export_dir: str = Field(default="exports", description="Export output directory")
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        return resolve_zone(value).key

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings() -> Settings:
    """Load settings from .env and the process environment.

    Returns:
        The validated Settings.

    Raises:
        pydantic.ValidationError: If a value is invalid.
    """
    load_dotenv()
    values = {}
    for env_name, field_name in ENV_FIELDS.items():
        env_value = os.getenv(ENV_PREFIX + env_name)
        if env_value is not None:
            values[field_name] = env_value
    return Settings(**values)
