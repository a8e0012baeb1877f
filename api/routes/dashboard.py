"""HTTP routes for dashboard and profile statistics."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import current_user_id
from api.models.schemas import DashboardStatsResponse, ProfileStatsResponse
from api.services.dashboard import dashboard_service

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def dashboard_stats(user_id: str = Depends(current_user_id)) -> DashboardStatsResponse:
    return dashboard_service.dashboard_stats(user_id)


@router.get("/profile/stats", response_model=ProfileStatsResponse)
def profile_stats(user_id: str = Depends(current_user_id)) -> ProfileStatsResponse:
    return dashboard_service.profile_stats(user_id)
