"""Per-user tracker preferences.

Each user gets a preference record the first time anything asks for it, seeded
from the configured system defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict

from api.models.schemas import ApplicationStatus, PreferencesResponse, PreferencesUpdate
from core.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class PreferenceRecord:
    """Internal representation of a user's preferences."""

    user_id: str
    default_status: ApplicationStatus
    default_follow_up_days: int
    created_at: datetime
    updated_at: datetime

    def to_response(self) -> PreferencesResponse:
        return PreferencesResponse(
            user_id=self.user_id,
            default_status=self.default_status,
            default_follow_up_days=self.default_follow_up_days,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class PreferenceStore:
    """Simple mutable preference repository keyed by user id."""

    def __init__(self) -> None:
        self._preferences: Dict[str, PreferenceRecord] = {}

    def _get_or_create(self, user_id: str) -> PreferenceRecord:
        record = self._preferences.get(user_id)
        if record is None:
            settings = get_settings()
            now = datetime.now(timezone.utc)
            record = PreferenceRecord(
                user_id=user_id,
                default_status=ApplicationStatus(settings.default_status),
                default_follow_up_days=settings.default_follow_up_days,
                created_at=now,
                updated_at=now,
            )
            self._preferences[user_id] = record
            logger.info("Created default preferences for user %s", user_id)
        return record

    def get_preferences(self, user_id: str) -> PreferencesResponse:
        return self._get_or_create(user_id).to_response()

    def get_default_follow_up_days(self, user_id: str) -> int:
        return self._get_or_create(user_id).default_follow_up_days

    def get_default_status(self, user_id: str) -> ApplicationStatus:
        return self._get_or_create(user_id).default_status

    def update_preferences(self, user_id: str, payload: PreferencesUpdate) -> PreferencesResponse:
        """Apply only the supplied fields, creating the record if needed."""

        record = self._get_or_create(user_id)
        if payload.default_status is not None:
            record.default_status = payload.default_status
        if payload.default_follow_up_days is not None:
            record.default_follow_up_days = payload.default_follow_up_days
        record.updated_at = datetime.now(timezone.utc)
        logger.info(
            "Updated preferences for user %s (status=%s, follow_up_days=%d)",
            user_id,
            record.default_status.value,
            record.default_follow_up_days,
        )
        return record.to_response()

    def reset(self) -> None:
        self._preferences.clear()


preference_store = PreferenceStore()
"""Module-level singleton used by the API routes."""
