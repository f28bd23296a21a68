from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel


class MetricStat(BaseModel):
    value: float
    recorded_at: datetime | None = None


class GoalEntry(BaseModel):
    goal_text: str
    created_at: datetime | None = None


class DashboardSummary(BaseModel):
    latest_metrics: dict[str, MetricStat] = {}
    goals: list[GoalEntry] = []

    # not wired to any table yet
    past_class_count: int = 0
    upcoming_sessions: list[str] = []
