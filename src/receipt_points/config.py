"""Configuration management for the receipt points service."""

import logging
import os
from datetime import datetime
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator, model_validator

from receipt_points.engine.scoring import AfternoonWindow

ENV_PREFIX = "RECEIPT_POINTS_"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    """Service configuration.

    Values come from ``RECEIPT_POINTS_*`` environment variables; see
    ``Settings.from_env``.
    """

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    afternoon_start: str = Field(default="14:00")
    afternoon_end: str = Field(default="18:00")
    default_submitter: str = Field(default="anonymous", min_length=1)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("afternoon_start", "afternoon_end")
    @classmethod
    def _check_clock_time(cls, value: str) -> str:
        datetime.strptime(value, "%H:%M")
        return value

    @model_validator(mode="after")
    def _check_window_order(self) -> "Settings":
        if self.afternoon_window.start >= self.afternoon_window.end:
            raise ValueError("afternoon_start must be earlier than afternoon_end")
        return self

    @property
    def afternoon_window(self) -> AfternoonWindow:
        return AfternoonWindow.from_strings(self.afternoon_start, self.afternoon_end)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, ignoring unset variables."""
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls(**values)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, parsed once."""
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the CLI and server."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
