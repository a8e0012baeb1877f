"""HTTP routes for user preferences and follow-up previews."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from api.deps import current_user_id
from api.models.schemas import (
    FollowUpPreviewRequest,
    FollowUpPreviewResponse,
    PreferencesResponse,
    PreferencesUpdate,
)
from api.services.application_store import application_store
from api.services.preference_store import preference_store
from scheduler.service import plan_follow_up

router = APIRouter(prefix="/api", tags=["preferences"])


@router.get("/user/preferences", response_model=PreferencesResponse)
def get_preferences(user_id: str = Depends(current_user_id)) -> PreferencesResponse:
    """Return the caller's preferences, creating defaults on first access."""

    return preference_store.get_preferences(user_id)


@router.put("/user/preferences", response_model=PreferencesResponse)
def update_preferences(
    request: PreferencesUpdate, user_id: str = Depends(current_user_id)
) -> PreferencesResponse:
    """Update preferences and move pending automatic follow-ups to match."""

    preferences = preference_store.update_preferences(user_id, request)
    if request.default_follow_up_days is not None:
        application_store.reschedule_follow_ups(user_id, preferences.default_follow_up_days)
    return preferences


@router.post("/reminders/preview", response_model=FollowUpPreviewResponse)
def preview_follow_up(
    request: FollowUpPreviewRequest, user_id: str = Depends(current_user_id)
) -> FollowUpPreviewResponse:
    """Compute the follow-up date a new application would receive."""

    applied_date = request.applied_date or date.today()
    days = preference_store.get_default_follow_up_days(user_id)
    plan = plan_follow_up(applied_date, request.deadline, days)
    return FollowUpPreviewResponse(
        applied_date=applied_date,
        deadline=request.deadline,
        default_follow_up_days=days,
        follow_up_reminder=plan.remind_on,
        days_until_deadline=plan.days_until_deadline,
        reason=plan.reason,
    )
