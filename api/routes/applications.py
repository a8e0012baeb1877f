"""HTTP routes for tracked job applications.

Handlers translate store errors into HTTP status codes: ``KeyError`` means the
application (or reminder) is unknown to the calling user, ``ValueError`` means
the request asked for something the store cannot do.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from api.deps import current_user_id, parse_uuid
from api.models.schemas import (
    ApplicationStatus,
    JobApplicationCreate,
    JobApplicationResponse,
    JobApplicationUpdate,
    JobType,
    Priority,
    ReminderCreate,
    ReminderResponse,
)
from api.services.application_store import application_store
from exports.csv_export import export_filename, render_csv

router = APIRouter(prefix="/api/jobs", tags=["applications"])


@router.get("", response_model=List[JobApplicationResponse])
def list_applications(
    status: Optional[ApplicationStatus] = None,
    priority: Optional[Priority] = None,
    job_type: Optional[JobType] = None,
    search: Optional[str] = None,
    sort_by: str = "applied_date",
    sort_order: str = "desc",
    user_id: str = Depends(current_user_id),
) -> List[JobApplicationResponse]:
    """List the caller's applications with optional filters."""

    try:
        return application_store.list_applications(
            user_id,
            status=status,
            priority=priority,
            job_type=job_type,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("", response_model=JobApplicationResponse, status_code=201)
def create_application(
    request: JobApplicationCreate, user_id: str = Depends(current_user_id)
) -> JobApplicationResponse:
    """Track a new application and schedule its follow-up reminder."""

    return application_store.create_application(user_id, request)


@router.get("/export")
def export_applications(
    ids: Optional[List[str]] = Query(None),
    user_id: str = Depends(current_user_id),
) -> Response:
    """Download the selected applications (or all of them) as CSV."""

    selected = [parse_uuid(value) for value in ids] if ids else None
    records = application_store.records_for(user_id, selected)
    records.sort(key=lambda r: (r.applied_date, r.created_at), reverse=True)
    return Response(
        content=render_csv(records),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(date.today())}"'},
    )


@router.get("/{application_id}", response_model=JobApplicationResponse)
def get_application(application_id: str, user_id: str = Depends(current_user_id)) -> JobApplicationResponse:
    try:
        return application_store.get_application(user_id, parse_uuid(application_id))
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Job application not found") from exc


@router.put("/{application_id}", response_model=JobApplicationResponse)
def update_application(
    application_id: str,
    request: JobApplicationUpdate,
    user_id: str = Depends(current_user_id),
) -> JobApplicationResponse:
    """Apply a partial update; date changes reschedule the follow-up."""

    try:
        return application_store.update_application(user_id, parse_uuid(application_id), request)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Job application not found") from exc


@router.delete("/{application_id}")
def delete_application(application_id: str, user_id: str = Depends(current_user_id)) -> dict[str, str]:
    try:
        application_store.delete_application(user_id, parse_uuid(application_id))
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Job application not found") from exc
    return {"message": "Job application deleted successfully"}


@router.post("/{application_id}/reminders", response_model=ReminderResponse, status_code=201)
def add_reminder(
    application_id: str,
    request: ReminderCreate,
    user_id: str = Depends(current_user_id),
) -> ReminderResponse:
    try:
        return application_store.add_reminder(user_id, parse_uuid(application_id), request)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Job application not found") from exc


@router.post("/{application_id}/reminders/{reminder_id}/complete", response_model=ReminderResponse)
def complete_reminder(
    application_id: str,
    reminder_id: str,
    user_id: str = Depends(current_user_id),
) -> ReminderResponse:
    try:
        return application_store.complete_reminder(
            user_id, parse_uuid(application_id), parse_uuid(reminder_id, label="Reminder")
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
