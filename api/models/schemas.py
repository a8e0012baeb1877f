"""Pydantic data models used by the FastAPI layer.

Request models validate what the tracker accepts over HTTP; response models
describe what the in-memory stores hand back. Dates are calendar dates with no
time-of-day component.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, HttpUrl

from core.settings import MAX_FOLLOW_UP_DAYS, MIN_FOLLOW_UP_DAYS

# Empty strings are accepted and mean "not provided".
OptionalEmail = Optional[Union[EmailStr, Literal[""]]]
OptionalUrl = Optional[Union[HttpUrl, Literal[""]]]


class ApplicationStatus(str, Enum):
    """Lifecycle states for a job application."""

    APPLIED = "APPLIED"
    PHONE_SCREENING = "PHONE_SCREENING"
    TECHNICAL_INTERVIEW = "TECHNICAL_INTERVIEW"
    ONSITE_INTERVIEW = "ONSITE_INTERVIEW"
    FINAL_INTERVIEW = "FINAL_INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class JobType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    INTERNSHIP = "INTERNSHIP"
    CONTRACT = "CONTRACT"
    FREELANCE = "FREELANCE"


class WorkLocation(str, Enum):
    REMOTE = "REMOTE"
    ONSITE = "ONSITE"
    HYBRID = "HYBRID"


class ReminderType(str, Enum):
    FOLLOW_UP = "follow_up"
    INTERVIEW = "interview"
    DEADLINE = "deadline"
    CUSTOM = "custom"


class EventType(str, Enum):
    STATUS_CHANGE = "status_change"


class SortField(str, Enum):
    """Columns the application list can be ordered by."""

    APPLIED_DATE = "applied_date"
    DEADLINE = "deadline"
    COMPANY = "company"
    POSITION = "position"
    STATUS = "status"
    PRIORITY = "priority"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class JobApplicationCreate(BaseModel):
    company: str = Field(..., min_length=1, description="Company is required")
    position: str = Field(..., min_length=1, description="Position is required")
    location: Optional[str] = None
    job_url: OptionalUrl = None
    salary: Optional[str] = None
    job_type: Optional[JobType] = None
    work_location: Optional[WorkLocation] = None
    status: Optional[ApplicationStatus] = Field(
        None, description="Falls back to the user's default status"
    )
    priority: Priority = Priority.MEDIUM
    applied_date: Optional[date] = Field(None, description="Defaults to today")
    deadline: Optional[date] = None
    follow_up_reminder: Optional[date] = Field(
        None, description="Explicit follow-up date; computed from preferences when omitted"
    )
    description: Optional[str] = None
    requirements: Optional[str] = None
    notes: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: OptionalEmail = None
    contact_phone: Optional[str] = None


class JobApplicationUpdate(BaseModel):
    company: Optional[str] = Field(None, min_length=1)
    position: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    job_url: OptionalUrl = None
    salary: Optional[str] = None
    job_type: Optional[JobType] = None
    work_location: Optional[WorkLocation] = None
    status: Optional[ApplicationStatus] = None
    priority: Optional[Priority] = None
    applied_date: Optional[date] = None
    deadline: Optional[date] = None
    follow_up_reminder: Optional[date] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    notes: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: OptionalEmail = None
    contact_phone: Optional[str] = None


class ReminderCreate(BaseModel):
    remind_at: date
    title: Optional[str] = None
    description: Optional[str] = None
    reminder_type: ReminderType = ReminderType.CUSTOM


class ReminderResponse(BaseModel):
    id: UUID
    application_id: UUID
    title: str
    description: Optional[str] = None
    remind_at: date
    reminder_type: ReminderType
    is_completed: bool = False
    auto_scheduled: bool = False
    created_at: datetime


class EventResponse(BaseModel):
    id: UUID
    application_id: UUID
    title: str
    description: Optional[str] = None
    event_date: date
    event_type: EventType
    created_at: datetime


class JobApplicationResponse(BaseModel):
    id: UUID
    company: str
    position: str
    location: Optional[str] = None
    job_url: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[JobType] = None
    work_location: Optional[WorkLocation] = None
    status: ApplicationStatus
    priority: Priority
    applied_date: date
    deadline: Optional[date] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    notes: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    events: List[EventResponse] = Field(default_factory=list)
    reminders: List[ReminderResponse] = Field(default_factory=list)


class PreferencesUpdate(BaseModel):
    default_status: Optional[ApplicationStatus] = None
    default_follow_up_days: Optional[int] = Field(
        None, ge=MIN_FOLLOW_UP_DAYS, le=MAX_FOLLOW_UP_DAYS, description="Follow-up days must be between 1 and 30"
    )


class PreferencesResponse(BaseModel):
    user_id: str
    default_status: ApplicationStatus
    default_follow_up_days: int
    created_at: datetime
    updated_at: datetime


class FollowUpPreviewRequest(BaseModel):
    applied_date: Optional[date] = Field(None, description="Defaults to today")
    deadline: Optional[date] = None


class FollowUpPreviewResponse(BaseModel):
    applied_date: date
    deadline: Optional[date] = None
    default_follow_up_days: int
    follow_up_reminder: date
    days_until_deadline: Optional[int] = None
    reason: str


class MonthlyBucket(BaseModel):
    total: int = 0
    offers: int = 0
    rejections: int = 0


class ApplicationSummary(BaseModel):
    id: UUID
    company: str
    position: str
    status: ApplicationStatus
    applied_date: date


class UpcomingReminder(BaseModel):
    id: UUID
    application_id: UUID
    title: str
    remind_at: date
    reminder_type: ReminderType
    company: str
    position: str
    deadline: Optional[date] = None


class DashboardStatsResponse(BaseModel):
    total_applications: int
    status_counts: Dict[str, int] = Field(default_factory=dict)
    priority_counts: Dict[str, int] = Field(default_factory=dict)
    monthly_data: Dict[str, MonthlyBucket] = Field(default_factory=dict)
    recent_applications: List[ApplicationSummary] = Field(default_factory=list)
    upcoming_reminders: List[UpcomingReminder] = Field(default_factory=list)


class ProfileStatsResponse(BaseModel):
    total_applications: int
    active_reminders: int
    days_active: int


__all__ = [
    "ApplicationStatus",
    "Priority",
    "JobType",
    "WorkLocation",
    "ReminderType",
    "EventType",
    "SortField",
    "SortOrder",
    "JobApplicationCreate",
    "JobApplicationUpdate",
    "JobApplicationResponse",
    "ReminderCreate",
    "ReminderResponse",
    "EventResponse",
    "PreferencesUpdate",
    "PreferencesResponse",
    "FollowUpPreviewRequest",
    "FollowUpPreviewResponse",
    "MonthlyBucket",
    "ApplicationSummary",
    "UpcomingReminder",
    "DashboardStatsResponse",
    "ProfileStatsResponse",
]
