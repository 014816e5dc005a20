"""Configuration loaded from environment variables."""
import logging
import os
from dataclasses import dataclass

from spaced_review.db import DEFAULT_DB_PATH

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    db_path: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from SPACED_REVIEW_DB and SPACED_REVIEW_LOG_LEVEL."""
        db_path = os.getenv("SPACED_REVIEW_DB") or DEFAULT_DB_PATH
        log_level = os.getenv("SPACED_REVIEW_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise RuntimeError(f"SPACED_REVIEW_LOG_LEVEL must be a logging level name, got {log_level!r}.")
        return cls(db_path=os.path.expanduser(db_path), log_level=log_level)
