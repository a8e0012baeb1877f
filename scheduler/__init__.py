"""Reminder scheduling."""

from .service import FollowUpPlan, compute_follow_up_date, days_until, plan_follow_up

__all__ = ["FollowUpPlan", "compute_follow_up_date", "days_until", "plan_follow_up"]
