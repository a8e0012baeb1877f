"""Follow-up reminder scheduling rules."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class FollowUpPlan:
    """A computed follow-up date plus the reason it was chosen."""

    remind_on: date
    days_until_deadline: Optional[int]
    before_deadline: bool

    @property
    def reason(self) -> str:
        if self.before_deadline:
            return f"Auto-set to day before deadline ({self.days_until_deadline} days until deadline)"
        return "Auto-set from default follow-up window"


def days_until(applied_date: date, deadline: date) -> int:
    """Whole days from ``applied_date`` to ``deadline``, rounded up."""

    delta = deadline - applied_date
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def compute_follow_up_date(
    applied_date: date,
    deadline: Optional[date],
    default_follow_up_days: int,
) -> date:
    """Return the date a follow-up reminder should fire.

    A deadline that falls within the follow-up window (inclusive) pulls the
    reminder to the day before the deadline. Otherwise the reminder lands
    ``default_follow_up_days`` after the applied date. The window is not
    range-checked here, and a deadline earlier than ``applied_date`` still
    yields ``deadline - 1 day``.
    """

    if deadline is not None and days_until(applied_date, deadline) <= default_follow_up_days:
        return deadline - timedelta(days=1)
    return applied_date + timedelta(days=default_follow_up_days)


def plan_follow_up(
    applied_date: date,
    deadline: Optional[date],
    default_follow_up_days: int,
) -> FollowUpPlan:
    remind_on = compute_follow_up_date(applied_date, deadline, default_follow_up_days)
    if deadline is None:
        return FollowUpPlan(remind_on=remind_on, days_until_deadline=None, before_deadline=False)
    remaining = days_until(applied_date, deadline)
    return FollowUpPlan(
        remind_on=remind_on,
        days_until_deadline=remaining,
        before_deadline=remaining <= default_follow_up_days,
    )
