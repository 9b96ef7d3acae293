from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

load_dotenv()

CABIN_CODES = ("Economy", "PremiumEconomy", "Business", "First")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    point_of_sale: str = Field("BD", alias="FLIGHTDESK_POINT_OF_SALE")
    default_cabin: str = Field("Economy", alias="FLIGHTDESK_DEFAULT_CABIN")
    guest_label: str = Field("Guest", alias="FLIGHTDESK_GUEST_LABEL")
    log_level: str = Field("INFO", alias="FLIGHTDESK_LOG_LEVEL")

    @field_validator("point_of_sale")
    @classmethod
    def _pos_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("FLIGHTDESK_POINT_OF_SALE must be a non-empty string")
        return v.strip().upper()

    @field_validator("default_cabin")
    @classmethod
    def _known_cabin(cls, v: str) -> str:
        if v not in CABIN_CODES:
            raise ValueError(
                f"FLIGHTDESK_DEFAULT_CABIN must be one of {', '.join(CABIN_CODES)}"
            )
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(
                f"FLIGHTDESK_LOG_LEVEL must be a logging level name, got {v!r}"
            )
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return application settings loaded from the environment."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["CABIN_CODES", "Settings", "get_settings"]
