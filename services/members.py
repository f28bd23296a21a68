"""
services/members.py
────────────────────────────────────────────────────────────────────────
Small DAO helpers over `services.db` used by the console flows and the
scripts.  Writes commit on success and roll back on any store error
before re-raising, so callers never see a half-written registration.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.models import GoalIn, MemberIn, MetricIn
from services.db import FitnessGoal, HealthMetric, Member, User, as_utc, member_dashboard_view

_LOG = logging.getLogger(__name__)


# ───────────────────────── writes ──────────────────────────
async def create_member(db: AsyncSession, body: MemberIn) -> tuple[User, Member]:
    """Insert the User identity row and its Member profile in one transaction."""
    try:
        user = User()
        db.add(user)
        await db.flush()  # need user.id for the FK

        member = Member(user_id=user.id, **body.model_dump())
        db.add(member)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    _LOG.info("registered member %s (user %s)", member.id, user.id)
    return user, member


async def add_goal(
    db: AsyncSession,
    member_id: int,
    body: GoalIn,
    created_at: datetime | None = None,
) -> FitnessGoal:
    goal = FitnessGoal(member_id=member_id, goal_text=body.goal_text)
    if created_at is not None:
        goal.created_at = as_utc(created_at)
    db.add(goal)
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    return goal


async def add_metric(
    db: AsyncSession,
    member_id: int,
    body: MetricIn,
    recorded_at: datetime | None = None,
) -> HealthMetric:
    metric = HealthMetric(member_id=member_id, metric_type=body.metric_type, value=body.value)
    if recorded_at is not None:
        metric.recorded_at = as_utc(recorded_at)
    db.add(metric)
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    return metric


# ───────────────────────── lookups ─────────────────────────
async def find_member_by_name(db: AsyncSession, full_name: str) -> Member | None:
    """Exact full-name match; first row by id when several share the name."""
    res = await db.execute(
        select(Member).where(Member.full_name == full_name).order_by(Member.id).limit(1)
    )
    return res.scalars().first()


async def find_member_by_email(db: AsyncSession, email: str) -> Member | None:
    res = await db.execute(select(Member).where(Member.email == email))
    return res.scalar_one_or_none()


async def search_members(db: AsyncSession, fragment: str) -> List[Member]:
    """Case-insensitive substring match on full name, ordered by name."""
    res = await db.execute(
        select(Member)
        .where(Member.full_name.icontains(fragment, autoescape=True))
        .order_by(Member.full_name.asc(), Member.id.asc())
    )
    return list(res.scalars().all())


async def fetch_dashboard_rows(db: AsyncSession, member_id: int) -> List[Dict[str, Any]]:
    view = member_dashboard_view
    res = await db.execute(
        select(view)
        .where(view.c.member_id == member_id)
        .order_by(
            view.c.metric_recorded_at.desc().nulls_last(),
            view.c.goal_created_at.desc().nulls_last(),
        )
    )
    return [dict(r._mapping) for r in res.fetchall()]


# ───────────────────────── seeding ─────────────────────────
DEMO_MEMBER = MemberIn(
    full_name="Demo Member",
    dob="1990-01-01",
    gender="M",
    email="demo@member.com",
    phone="555-1111",
)


async def ensure_demo_member(db: AsyncSession) -> Member | None:
    """Insert the demo member once; returns it when newly created, else None."""
    if await find_member_by_email(db, DEMO_MEMBER.email):
        return None
    _, member = await create_member(db, DEMO_MEMBER)
    return member
