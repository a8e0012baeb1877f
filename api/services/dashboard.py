"""Dashboard and profile aggregation over the application store."""

from __future__ import annotations

import calendar
from collections import Counter
from datetime import date, timedelta
from typing import Dict, Optional

from api.models.schemas import (
    ApplicationStatus,
    ApplicationSummary,
    DashboardStatsResponse,
    MonthlyBucket,
    ProfileStatsResponse,
    UpcomingReminder,
)
from api.services.application_store import ApplicationStore, application_store
from core.settings import get_settings


def months_before(day: date, months: int) -> date:
    """Shift ``day`` back by whole calendar months, clamping the day of month."""

    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class DashboardService:
    """Group-by style statistics for a single user's applications."""

    def __init__(self, store: ApplicationStore) -> None:
        self.store = store

    def dashboard_stats(self, user_id: str, today: Optional[date] = None) -> DashboardStatsResponse:
        settings = get_settings()
        today = today or date.today()
        records = self.store.records_for(user_id)

        status_counts = Counter(r.status.value for r in records)
        priority_counts = Counter(r.priority.value for r in records)

        window_start = months_before(today, settings.dashboard_months)
        monthly: Dict[str, MonthlyBucket] = {}
        for record in records:
            if record.applied_date < window_start:
                continue
            bucket = monthly.setdefault(record.applied_date.strftime("%Y-%m"), MonthlyBucket())
            bucket.total += 1
            if record.status == ApplicationStatus.OFFER:
                bucket.offers += 1
            if record.status == ApplicationStatus.REJECTED:
                bucket.rejections += 1

        recent = sorted(records, key=lambda r: (r.applied_date, r.created_at), reverse=True)
        recent_applications = [
            ApplicationSummary(
                id=r.id,
                company=r.company,
                position=r.position,
                status=r.status,
                applied_date=r.applied_date,
            )
            for r in recent[: settings.recent_limit]
        ]

        horizon = today + timedelta(days=settings.upcoming_window_days)
        upcoming = [
            (reminder, record)
            for record in records
            for reminder in record.reminders
            if not reminder.is_completed and today <= reminder.remind_at <= horizon
        ]
        upcoming.sort(key=lambda pair: (pair[0].remind_at, pair[0].created_at))
        upcoming_reminders = [
            UpcomingReminder(
                id=reminder.id,
                application_id=record.id,
                title=reminder.title,
                remind_at=reminder.remind_at,
                reminder_type=reminder.reminder_type,
                company=record.company,
                position=record.position,
                deadline=record.deadline,
            )
            for reminder, record in upcoming[: settings.upcoming_limit]
        ]

        return DashboardStatsResponse(
            total_applications=len(records),
            status_counts=dict(status_counts),
            priority_counts=dict(priority_counts),
            monthly_data=dict(sorted(monthly.items())),
            recent_applications=recent_applications,
            upcoming_reminders=upcoming_reminders,
        )

    def profile_stats(self, user_id: str, today: Optional[date] = None) -> ProfileStatsResponse:
        today = today or date.today()
        records = self.store.records_for(user_id)
        active = sum(
            1
            for record in records
            for reminder in record.reminders
            if not reminder.is_completed and reminder.remind_at >= today
        )
        member_since = self.store.preferences.get_preferences(user_id).created_at.astimezone().date()
        return ProfileStatsResponse(
            total_applications=len(records),
            active_reminders=active,
            days_active=max((today - member_since).days, 0),
        )


dashboard_service = DashboardService(application_store)
"""Module-level singleton used by the API routes."""
