"""Registry settings, read from the environment (or a .env file)."""

import logging
import os
from typing import Any, Dict

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from notifycenter.observability import get_logger

ENV_LOG_LEVEL = "NOTIFYCENTER_LOG_LEVEL"
ENV_REPLACE_FILTER = "NOTIFYCENTER_REPLACE_FILTER"

DEFAULT_LOG_LEVEL = "INFO"


class RegistrySettings(BaseModel):
    """Settings for a Registry.

    log_level: level of the process-wide "notifycenter.registry" logger. It is
    applied once, when default_registry() builds the default instance; private
    registries share that logger and do not change its level.

    replace_filter: when a redundant subscribe happens, overwrite the stored
    filter with the new one instead of keeping the original.
    """

    log_level: str = DEFAULT_LOG_LEVEL
    replace_filter: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> "RegistrySettings":
        """Load .env from the working directory (without overriding the environment) and build settings.

        Invalid values fall back to the defaults.
        """
        load_dotenv(find_dotenv(usecwd=True))
        data: Dict[str, Any] = {}
        if os.environ.get(ENV_LOG_LEVEL):
            data["log_level"] = os.environ[ENV_LOG_LEVEL]
        if os.environ.get(ENV_REPLACE_FILTER):
            data["replace_filter"] = os.environ[ENV_REPLACE_FILTER].strip()
        try:
            return cls(**data)
        except ValidationError as e:
            get_logger("notifycenter.config").warning(
                "invalid_settings",
                extra={"error": str(e)},
            )
            return cls()
