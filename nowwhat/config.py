"""Engine settings and logging setup for NowWhat.

Settings are read from the environment (and a local `.env` file when present).
Engine functions that take a budget, limit or horizon fall back to
`get_settings()` when the argument is omitted.
"""

import logging
import os
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from nowwhat.errors import ConfigError
from nowwhat.models.constants import (
    FALLBACK_AVAILABLE_MINUTES,
    SCHEDULE_HORIZON_DAYS,
    TODAY_TASK_LIMIT,
)

load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class EngineSettings(BaseModel):
    """Runtime knobs for the scheduling engine."""

    fallback_available_minutes: int = Field(
        FALLBACK_AVAILABLE_MINUTES,
        description="Budget used when the calendar cannot supply today's available minutes",
    )
    schedule_days: int = Field(SCHEDULE_HORIZON_DAYS, description="Weekly scheduler horizon in days")
    today_task_limit: int = Field(TODAY_TASK_LIMIT, description="Maximum tasks suggested for today")
    log_level: str = Field("INFO", description="Engine log level")


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build settings from an environment mapping (defaults to os.environ)."""
    if environ is None:
        environ = os.environ

    debug = environ.get("DEBUG", "False").lower() == "true"
    log_level = environ.get("LOG_LEVEL", "DEBUG" if debug else "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"LOG_LEVEL {log_level!r} is not a logging level")

    return EngineSettings(
        fallback_available_minutes=_positive_int(
            environ, "NOWWHAT_FALLBACK_AVAILABLE_MINUTES", FALLBACK_AVAILABLE_MINUTES
        ),
        schedule_days=_positive_int(environ, "NOWWHAT_SCHEDULE_DAYS", SCHEDULE_HORIZON_DAYS),
        today_task_limit=_positive_int(environ, "NOWWHAT_TODAY_TASK_LIMIT", TODAY_TASK_LIMIT),
        log_level=log_level,
    )


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Return cached settings built from os.environ."""
    return load_settings()


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the engine."""
    logging.basicConfig(level=level or get_settings().log_level, format=LOG_FORMAT)
