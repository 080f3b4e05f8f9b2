"""Environment driven settings for logging and shuffling."""
from __future__ import annotations

import logging
import os
import random
from typing import Optional

from pydantic import BaseModel, Field, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def parse_flag(name: str, default: str = "0") -> bool:
    """Read boolean flag ``name`` from the environment.

    Unknown values raise ``ValueError`` instead of silently falling back.
    """
    value = os.getenv(name, default).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid value for {name}: {value!r}")


class Settings(BaseModel):
    log_level: str = "WARNING"
    log_json: bool = False
    shuffle_seed: Optional[int] = None
    error_alert_threshold: int = Field(0, ge=0)

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {v!r}")
        return level


def load_settings() -> Settings:
    return Settings(
        log_level=os.getenv("COLLECTION_LOG_LEVEL", "WARNING"),
        log_json=parse_flag("COLLECTION_LOG_JSON"),
        shuffle_seed=os.getenv("COLLECTION_SHUFFLE_SEED") or None,
        error_alert_threshold=os.getenv("COLLECTION_ERROR_ALERT_THRESHOLD", "0"),
    )


def load_shuffle_seed() -> Optional[int]:
    """Read only the shuffle seed, so other bad variables cannot affect it."""
    return Settings(shuffle_seed=os.getenv("COLLECTION_SHUFFLE_SEED") or None).shuffle_seed


def load_alert_threshold() -> int:
    return Settings(
        error_alert_threshold=os.getenv("COLLECTION_ERROR_ALERT_THRESHOLD", "0")
    ).error_alert_threshold


_rng: Optional[random.Random] = None


def default_rng() -> random.Random:
    """Return the process-wide generator used by ``shuffle``."""
    global _rng
    if _rng is None:
        _rng = random.Random(load_shuffle_seed())
    return _rng


def reset_default_rng() -> None:
    global _rng
    _rng = None
