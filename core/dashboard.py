"""
core/dashboard.py
────────────────────────────────────────────────────────────────────────
Fold `member_dashboard_view` rows into a member dashboard.

The view yields one row per (metric, goal) pairing and the read query
orders them by metric recorded-at DESC, then goal created-at DESC, nulls
last.  Both reductions below keep the *first* row they see:

1.   latest metric per type – first occurrence of each `metric_type`,
     which under that ordering is the most recent value.  Not a MAX:
     if the upstream ordering changes, "latest" changes with it.
2.   goals – first occurrence of each `goal_id`, which lists every goal
     once, newest first.

Rendering is kept separate so the CLI and the scripts print the same
block.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping

import pandas as pd

from core.models import DashboardSummary, GoalEntry, MetricStat

_LOG = logging.getLogger(__name__)

DASHBOARD_COLUMNS = [
    "member_id",
    "metric_id",
    "metric_type",
    "metric_value",
    "metric_recorded_at",
    "goal_id",
    "goal_text",
    "goal_created_at",
]

UNKNOWN_DATE = "unknown date"


def _ts(value: Any) -> datetime | None:
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value).to_pydatetime()


def summarize_dashboard(rows: Iterable[Mapping[str, Any]]) -> DashboardSummary:
    df = pd.DataFrame([dict(r) for r in rows], columns=DASHBOARD_COLUMNS)
    if df.empty:
        return DashboardSummary()

    metrics = (
        df.dropna(subset=["metric_type"])
        .drop_duplicates(subset="metric_type", keep="first")
    )
    latest = {
        str(r.metric_type): MetricStat(
            value=float(r.metric_value), recorded_at=_ts(r.metric_recorded_at)
        )
        for r in metrics.itertuples(index=False)
    }

    goal_rows = df.dropna(subset=["goal_text"])
    goal_rows = goal_rows[goal_rows["goal_text"] != ""]
    # rows without an id (hand-built input) are never collapsed together
    with_id = goal_rows["goal_id"].notna()
    goal_rows = goal_rows[~with_id | ~goal_rows.duplicated(subset="goal_id", keep="first")]
    goals = [
        GoalEntry(goal_text=str(r.goal_text), created_at=_ts(r.goal_created_at))
        for r in goal_rows.itertuples(index=False)
    ]

    _LOG.debug(
        "dashboard: %d rows → %d metric types, %d goals", len(df), len(latest), len(goals)
    )
    return DashboardSummary(latest_metrics=latest, goals=goals)


# ───────────────────────────── render ──────────────────────────── #
def format_value(value: float) -> str:
    return f"{value:.15g}"


def to_local(value: datetime) -> datetime:
    """Operator's local time; naive values from the store are UTC wall-clock."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone()


def format_date(value: datetime | None, date_format: str) -> str:
    if value is None:
        return UNKNOWN_DATE
    return to_local(value).strftime(date_format)


def render_dashboard(member: Any, summary: DashboardSummary, date_format: str) -> List[str]:
    """Return the dashboard as printable lines for `member` (anything with
    `full_name`, `email` and `phone` attributes)."""
    lines = [
        "",
        "=== MEMBER DASHBOARD ===",
        f"Name:  {member.full_name}",
        f"Email: {member.email}",
        f"Phone: {member.phone}",
        "",
        "Latest Health Stats:",
    ]
    if not summary.latest_metrics:
        lines.append("  (none)")
    for metric_type, stat in summary.latest_metrics.items():
        lines.append(
            f"  - {metric_type}: {format_value(stat.value)} "
            f"({format_date(stat.recorded_at, date_format)})"
        )

    lines += ["", "Fitness Goals:"]
    if not summary.goals:
        lines.append("  (none)")
    for i, goal in enumerate(summary.goals, start=1):
        lines.append(f"  {i}) {goal.goal_text} [{format_date(goal.created_at, date_format)}]")

    upcoming = ", ".join(summary.upcoming_sessions) or "none"
    lines += [
        "",
        f"Past Class Count: (stub) {summary.past_class_count}",
        f"Upcoming Sessions: (stub) {upcoming}",
    ]
    return lines
