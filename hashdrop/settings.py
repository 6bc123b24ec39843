# -*- coding: utf-8 -*-
"""Process configuration, read once from the environment at startup."""

import ipaddress
import logging
from pathlib import Path
from typing import Union
from urllib.parse import urlsplit

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .hashdrop import MIN_LENGTH as SHORTEST_NAME


logger = logging.getLogger(__name__)

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

#: Levels understood by both `logging` and uvicorn.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """
    Central config for the service. Uses Pydantic v2 + pydantic-settings.

    - Loads env from ``.env`` in the working directory if present
    - Ignores unknown env vars
    - Case-insensitive env keys
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # --- Storage --------------------------------------------------------------
    FS_DEST_DIR: Path
    BASE_URL: str
    MIN_LENGTH: int = SHORTEST_NAME

    # --- Server ---------------------------------------------------------------
    HOST: str = "0.0.0.0"
    PORT: int = 7777
    LOG_LEVEL: str = "INFO"

    # --- Access ---------------------------------------------------------------
    ALLOWED_SUBNET: IPNetwork = ipaddress.ip_network("100.64.0.0/10")
    ENFORCE_SUBNET: bool = False  # 1 -> reject clients outside ALLOWED_SUBNET

    @field_validator("BASE_URL")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            raise ValueError("BASE_URL is not a valid URL")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError("LOG_LEVEL must be one of {0}".format(
                ", ".join(LOG_LEVELS)))
        return value

    @field_validator("MIN_LENGTH")
    @classmethod
    def _check_min_length(cls, value: int) -> int:
        if value < SHORTEST_NAME:
            raise ValueError(
                "MIN_LENGTH must be at least {0}".format(SHORTEST_NAME))
        return value

    def log_defaults(self) -> None:
        """Log the optional settings that fell back to their defaults."""
        for field in ("PORT", "ALLOWED_SUBNET"):
            if field not in self.model_fields_set:
                logger.info("%s not set, using default %s", field,
                            getattr(self, field))
