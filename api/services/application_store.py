"""In-memory job application repository.

The store owns applications together with their timeline events and reminders.
Follow-up reminders are computed by :mod:`scheduler.service`; the store is the
caller that gathers the applied date, deadline and the user's follow-up window,
and persists whatever date the scheduler returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from api.models.schemas import (
    ApplicationStatus,
    EventResponse,
    EventType,
    JobApplicationCreate,
    JobApplicationResponse,
    JobApplicationUpdate,
    JobType,
    Priority,
    ReminderCreate,
    ReminderResponse,
    ReminderType,
    SortField,
    SortOrder,
    WorkLocation,
)
from api.services.preference_store import PreferenceStore, preference_store
from scheduler.service import compute_follow_up_date

logger = logging.getLogger(__name__)

# Fields copied straight from create/update payloads onto the record.
_PLAIN_FIELDS = (
    "company",
    "position",
    "location",
    "job_url",
    "salary",
    "job_type",
    "work_location",
    "priority",
    "description",
    "requirements",
    "notes",
    "contact_name",
    "contact_email",
    "contact_phone",
)


@dataclass
class ReminderRecord:
    id: UUID
    application_id: UUID
    title: str
    remind_at: date
    reminder_type: ReminderType
    created_at: datetime
    description: Optional[str] = None
    is_completed: bool = False
    auto_scheduled: bool = False

    def to_response(self) -> ReminderResponse:
        return ReminderResponse(
            id=self.id,
            application_id=self.application_id,
            title=self.title,
            description=self.description,
            remind_at=self.remind_at,
            reminder_type=self.reminder_type,
            is_completed=self.is_completed,
            auto_scheduled=self.auto_scheduled,
            created_at=self.created_at,
        )


@dataclass
class EventRecord:
    id: UUID
    application_id: UUID
    title: str
    event_date: date
    event_type: EventType
    created_at: datetime
    description: Optional[str] = None

    def to_response(self) -> EventResponse:
        return EventResponse(
            id=self.id,
            application_id=self.application_id,
            title=self.title,
            description=self.description,
            event_date=self.event_date,
            event_type=self.event_type,
            created_at=self.created_at,
        )


@dataclass
class ApplicationRecord:
    """Internal representation of a job application."""

    id: UUID
    user_id: str
    company: str
    position: str
    status: ApplicationStatus
    priority: Priority
    applied_date: date
    created_at: datetime
    updated_at: datetime
    deadline: Optional[date] = None
    location: Optional[str] = None
    job_url: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[JobType] = None
    work_location: Optional[WorkLocation] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    notes: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    events: List[EventRecord] = field(default_factory=list)
    reminders: List[ReminderRecord] = field(default_factory=list)

    def pending_follow_up(self) -> Optional[ReminderRecord]:
        for reminder in self.reminders:
            if reminder.reminder_type == ReminderType.FOLLOW_UP and not reminder.is_completed:
                return reminder
        return None


class ApplicationStore:
    """Simple mutable application repository."""

    def __init__(self, preferences: PreferenceStore) -> None:
        self._applications: Dict[UUID, ApplicationRecord] = {}
        self.preferences = preferences

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------
    def create_application(
        self, user_id: str, payload: JobApplicationCreate, today: Optional[date] = None
    ) -> JobApplicationResponse:
        today = today or date.today()
        now = datetime.now(timezone.utc)
        record = ApplicationRecord(
            id=uuid4(),
            user_id=user_id,
            company=payload.company,
            position=payload.position,
            status=payload.status or self.preferences.get_default_status(user_id),
            priority=payload.priority,
            applied_date=payload.applied_date or today,
            deadline=payload.deadline,
            created_at=now,
            updated_at=now,
        )
        for name in _PLAIN_FIELDS:
            value = getattr(payload, name)
            if value is not None:
                setattr(record, name, _plain_value(value))
        self._applications[record.id] = record
        self._add_event(
            record,
            title="Application Created",
            description=f"Applied to {record.position} at {record.company}",
            event_date=record.applied_date,
        )
        if payload.follow_up_reminder is not None:
            self.create_reminder(record.id, payload.follow_up_reminder)
        else:
            self._schedule_follow_up(record)
        logger.info("Created application %s for user %s", record.id, user_id)
        return self._to_response(record)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------
    def get_application(self, user_id: str, application_id: UUID) -> JobApplicationResponse:
        return self._to_response(self._owned(user_id, application_id))

    def read_application(self, application_id: UUID) -> Tuple[date, Optional[date]]:
        """Return the applied date and deadline the scheduler needs."""

        record = self._applications[application_id]
        return record.applied_date, record.deadline

    def list_applications(
        self,
        user_id: str,
        status: Optional[ApplicationStatus] = None,
        priority: Optional[Priority] = None,
        job_type: Optional[JobType] = None,
        search: Optional[str] = None,
        sort_by: str = SortField.APPLIED_DATE.value,
        sort_order: str = SortOrder.DESC.value,
    ) -> List[JobApplicationResponse]:
        try:
            sort_field = SortField(sort_by)
            order = SortOrder(sort_order.lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported sort option: {exc}") from exc

        records = self.records_for(user_id)
        if status is not None:
            records = [r for r in records if r.status == status]
        if priority is not None:
            records = [r for r in records if r.priority == priority]
        if job_type is not None:
            records = [r for r in records if r.job_type == job_type]
        if search:
            needle = search.lower()
            records = [
                r
                for r in records
                if any(needle in (value or "").lower() for value in (r.company, r.position, r.location))
            ]

        present = [r for r in records if _sort_value(r, sort_field) is not None]
        missing = [r for r in records if _sort_value(r, sort_field) is None]
        present.sort(key=lambda r: _sort_value(r, sort_field), reverse=order == SortOrder.DESC)
        return [self._to_response(r) for r in present + missing]

    def records_for(self, user_id: str, ids: Optional[List[UUID]] = None) -> List[ApplicationRecord]:
        """Return the user's records, optionally restricted to ``ids``."""

        records = [r for r in self._applications.values() if r.user_id == user_id]
        if ids:
            wanted = set(ids)
            records = [r for r in records if r.id in wanted]
        return records

    # ------------------------------------------------------------------
    # Update / delete
    # ------------------------------------------------------------------
    def update_application(
        self,
        user_id: str,
        application_id: UUID,
        payload: JobApplicationUpdate,
        today: Optional[date] = None,
    ) -> JobApplicationResponse:
        record = self._owned(user_id, application_id)
        today = today or date.today()
        changes = payload.model_dump(exclude_unset=True)

        for name in _PLAIN_FIELDS:
            if name in changes and changes[name] is not None:
                setattr(record, name, _plain_value(changes[name]))

        dates_changed = False
        if changes.get("applied_date") is not None and changes["applied_date"] != record.applied_date:
            record.applied_date = changes["applied_date"]
            dates_changed = True
        if changes.get("deadline") is not None and changes["deadline"] != record.deadline:
            record.deadline = changes["deadline"]
            dates_changed = True

        new_status = changes.get("status")
        if new_status is not None and new_status != record.status:
            record.status = new_status
            self._add_event(
                record,
                title=f"Status Changed to {new_status.value}",
                description=f"Application status updated to {new_status.value.replace('_', ' ')}",
                event_date=today,
            )

        if changes.get("follow_up_reminder") is not None:
            self._set_manual_follow_up(record, changes["follow_up_reminder"])
        elif dates_changed:
            self._reschedule(record, self.preferences.get_default_follow_up_days(user_id))

        record.updated_at = datetime.now(timezone.utc)
        logger.info("Updated application %s (fields=%s)", record.id, ", ".join(sorted(changes)))
        return self._to_response(record)

    def delete_application(self, user_id: str, application_id: UUID) -> None:
        record = self._owned(user_id, application_id)
        del self._applications[record.id]
        logger.info("Deleted application %s for user %s", record.id, user_id)

    # ------------------------------------------------------------------
    # Reminders
    # ------------------------------------------------------------------
    def create_reminder(
        self,
        application_id: UUID,
        remind_at: date,
        reminder_type: ReminderType = ReminderType.FOLLOW_UP,
        title: Optional[str] = None,
        description: Optional[str] = None,
        auto_scheduled: bool = False,
    ) -> UUID:
        record = self._applications[application_id]
        reminder = ReminderRecord(
            id=uuid4(),
            application_id=record.id,
            title=title or f"{record.position} application",
            description=description,
            remind_at=remind_at,
            reminder_type=reminder_type,
            created_at=datetime.now(timezone.utc),
            auto_scheduled=auto_scheduled,
        )
        record.reminders.append(reminder)
        logger.info(
            "Scheduled %s reminder for application %s on %s",
            reminder_type.value,
            record.id,
            remind_at.isoformat(),
        )
        return reminder.id

    def add_reminder(self, user_id: str, application_id: UUID, payload: ReminderCreate) -> ReminderResponse:
        record = self._owned(user_id, application_id)
        reminder_id = self.create_reminder(
            record.id,
            payload.remind_at,
            reminder_type=payload.reminder_type,
            title=payload.title,
            description=payload.description,
        )
        return self._reminder(record, reminder_id).to_response()

    def complete_reminder(self, user_id: str, application_id: UUID, reminder_id: UUID) -> ReminderResponse:
        record = self._owned(user_id, application_id)
        reminder = self._reminder(record, reminder_id)
        reminder.is_completed = True
        record.updated_at = datetime.now(timezone.utc)
        return reminder.to_response()

    def reschedule_follow_ups(self, user_id: str, default_follow_up_days: int) -> int:
        """Recompute pending auto-scheduled follow-ups after a preference change."""

        moved = 0
        for record in self.records_for(user_id):
            if self._reschedule(record, default_follow_up_days):
                moved += 1
        logger.info("Rescheduled %d follow-up reminders for user %s", moved, user_id)
        return moved

    def _schedule_follow_up(self, record: ApplicationRecord) -> UUID:
        days = self.preferences.get_default_follow_up_days(record.user_id)
        applied_date, deadline = self.read_application(record.id)
        remind_at = compute_follow_up_date(applied_date, deadline, days)
        return self.create_reminder(record.id, remind_at, auto_scheduled=True)

    def _reschedule(self, record: ApplicationRecord, default_follow_up_days: int) -> bool:
        reminder = record.pending_follow_up()
        if reminder is None or not reminder.auto_scheduled:
            return False
        applied_date, deadline = self.read_application(record.id)
        remind_at = compute_follow_up_date(applied_date, deadline, default_follow_up_days)
        if remind_at == reminder.remind_at:
            return False
        reminder.remind_at = remind_at
        return True

    def _set_manual_follow_up(self, record: ApplicationRecord, remind_at: date) -> None:
        reminder = record.pending_follow_up()
        if reminder is None:
            self.create_reminder(record.id, remind_at)
            return
        reminder.remind_at = remind_at
        reminder.auto_scheduled = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _owned(self, user_id: str, application_id: UUID) -> ApplicationRecord:
        record = self._applications.get(application_id)
        if record is None or record.user_id != user_id:
            raise KeyError(f"Job application {application_id} not found")
        return record

    def _reminder(self, record: ApplicationRecord, reminder_id: UUID) -> ReminderRecord:
        for reminder in record.reminders:
            if reminder.id == reminder_id:
                return reminder
        raise KeyError(f"Reminder {reminder_id} not found")

    def _add_event(self, record: ApplicationRecord, title: str, description: str, event_date: date) -> None:
        record.events.append(
            EventRecord(
                id=uuid4(),
                application_id=record.id,
                title=title,
                description=description,
                event_date=event_date,
                event_type=EventType.STATUS_CHANGE,
                created_at=datetime.now(timezone.utc),
            )
        )

    def _to_response(self, record: ApplicationRecord) -> JobApplicationResponse:
        events = sorted(record.events, key=lambda e: (e.event_date, e.created_at), reverse=True)
        reminders = sorted(record.reminders, key=lambda r: (r.remind_at, r.created_at))
        return JobApplicationResponse(
            id=record.id,
            company=record.company,
            position=record.position,
            location=record.location,
            job_url=record.job_url,
            salary=record.salary,
            job_type=record.job_type,
            work_location=record.work_location,
            status=record.status,
            priority=record.priority,
            applied_date=record.applied_date,
            deadline=record.deadline,
            description=record.description,
            requirements=record.requirements,
            notes=record.notes,
            contact_name=record.contact_name,
            contact_email=record.contact_email,
            contact_phone=record.contact_phone,
            created_at=record.created_at,
            updated_at=record.updated_at,
            events=[e.to_response() for e in events],
            reminders=[r.to_response() for r in reminders],
        )

    def reset(self) -> None:
        self._applications.clear()


def _plain_value(value):
    # HttpUrl and friends are stored as their string form.
    if value is None or isinstance(value, (str, Enum)):
        return value
    return str(value)


def _sort_value(record: ApplicationRecord, sort_field: SortField):
    value = getattr(record, sort_field.value)
    # Enums order by declaration (LOW < MEDIUM < HIGH), not alphabetically.
    if isinstance(value, Enum):
        return list(type(value)).index(value)
    if isinstance(value, str):
        return value.lower()
    return value


application_store = ApplicationStore(preference_store)
"""Module-level singleton used by the API routes."""
