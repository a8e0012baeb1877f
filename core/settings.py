"""Application settings and environment configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
import os
from functools import lru_cache

MIN_FOLLOW_UP_DAYS = 1
MAX_FOLLOW_UP_DAYS = 30


@dataclass
class Settings:
    """Runtime configuration resolved from environment variables."""

    default_follow_up_days: int = 7
    default_status: str = "APPLIED"
    log_level: str = "INFO"
    recent_limit: int = 5
    upcoming_window_days: int = 7
    upcoming_limit: int = 5
    dashboard_months: int = 6

    def __post_init__(self) -> None:
        env_follow_up = os.getenv("JOBTRACKER_DEFAULT_FOLLOW_UP_DAYS")
        env_status = os.getenv("JOBTRACKER_DEFAULT_STATUS")
        env_log_level = os.getenv("JOBTRACKER_LOG_LEVEL")
        if env_follow_up:
            self.default_follow_up_days = int(env_follow_up)
        if env_status:
            self.default_status = env_status.upper()
        if env_log_level:
            self.log_level = env_log_level.upper()
        if not MIN_FOLLOW_UP_DAYS <= self.default_follow_up_days <= MAX_FOLLOW_UP_DAYS:
            raise ValueError(
                f"Default follow-up days must be between {MIN_FOLLOW_UP_DAYS} and "
                f"{MAX_FOLLOW_UP_DAYS}, got {self.default_follow_up_days}"
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
