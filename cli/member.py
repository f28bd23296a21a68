"""
Member menu: registration, goals, metrics and the dashboard.

Every flow validates its input before writing and catches store errors at
its own boundary, so a failure prints a message and lands back on the menu.
"""
from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from cli.console import Console
from cli.selector import select_member_by_name
from config import settings
from core.dashboard import format_value, render_dashboard, summarize_dashboard, to_local
from core.models import GoalIn, MemberIn, MetricIn
from services.db import Member, get_session
from services.members import add_goal, add_metric, create_member, fetch_dashboard_rows

_LOG = logging.getLogger(__name__)

MENU = [
    (1, "Register new member"),
    (2, "Update profile / goals"),
    (3, "Add health metric entry"),
    (4, "View member dashboard"),
    (0, "Back"),
]


def describe(exc: ValidationError) -> str:
    """One readable line per failing field."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "input"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


async def member_menu(console: Console) -> None:
    flows = {
        1: member_register,
        2: member_add_goal,
        3: member_add_metric,
        4: member_dashboard,
    }
    while True:
        choice = console.menu("Member Menu", MENU)
        if choice == 0:
            return
        await flows[choice](console)


# ───────────────────────── register ─────────────────────────
async def member_register(console: Console) -> None:
    console.say("", "-- Register New Member --")
    raw = {
        "full_name": console.ask("Full name: "),
        "dob": console.ask("Date of birth (YYYY-MM-DD): "),
        "gender": console.ask("Gender: "),
        "email": console.ask("Email (must be unique): "),
        "phone": console.ask("Phone number: "),
    }
    try:
        body = MemberIn(**raw)
    except ValidationError as exc:
        console.say("", f"✗ Invalid member details: {describe(exc)}")
        return

    try:
        async with get_session() as db:
            user, member = await create_member(db, body)
    except SQLAlchemyError as exc:
        _LOG.warning("member registration failed: %s", exc)
        detail = getattr(exc, "orig", None) or exc  # driver message, minus the SQL echo
        console.say("", f"✗ Error registering member: {detail}")
        return

    console.say(
        "",
        "✓ Member registered successfully!",
        f"User ID:    {user.id}",
        f"Member ID:  {member.id}",
    )


# ───────────────────────── goals ────────────────────────────
async def member_add_goal(console: Console) -> None:
    console.say("", "-- Add Fitness Goal --")
    member = await select_member_by_name(console)
    if member is None:
        return

    try:
        body = GoalIn(goal_text=console.ask("Fitness goal (text): "))
    except ValidationError:
        console.say("", "✗ Fitness goal cannot be empty.")
        return

    try:
        async with get_session() as db:
            goal = await add_goal(db, member.id, body)
    except SQLAlchemyError as exc:
        _LOG.warning("adding goal for member %s failed: %s", member.id, exc)
        console.say("", f"✗ Error adding fitness goal: {exc}")
        return

    console.say(
        "",
        "✓ Fitness goal recorded:",
        f"  id={goal.id} member_id={goal.member_id} goal_text={goal.goal_text!r} "
        f"created_at={to_local(goal.created_at):%Y-%m-%d %H:%M:%S}",
    )


# ───────────────────────── metrics ──────────────────────────
async def member_add_metric(console: Console) -> None:
    console.say("", "-- Add Health Metric Entry --")
    member = await select_member_by_name(console)
    if member is None:
        return

    metric_type = console.ask("Metric type (e.g., weight, heart_rate): ")
    value = console.ask("Metric value (numeric, e.g., 72.5): ")
    try:
        body = MetricIn(metric_type=metric_type, value=value)
    except ValidationError as exc:
        if any(err["loc"] == ("value",) for err in exc.errors()):
            console.say("", "✗ Metric value must be a number.")
        else:
            console.say("", "✗ Metric type cannot be empty.")
        return

    try:
        async with get_session() as db:
            metric = await add_metric(db, member.id, body)
    except SQLAlchemyError as exc:
        _LOG.warning("adding metric for member %s failed: %s", member.id, exc)
        console.say("", f"✗ Error adding metric: {exc}")
        return

    console.say(
        "",
        "✓ Health metric recorded:",
        f"  id={metric.id} member_id={metric.member_id} metric_type={metric.metric_type!r} "
        f"value={format_value(metric.value)} recorded_at={to_local(metric.recorded_at):%Y-%m-%d %H:%M:%S}",
    )


# ───────────────────────── dashboard ────────────────────────
async def show_dashboard(console: Console, member: Member) -> None:
    try:
        async with get_session() as db:
            rows = await fetch_dashboard_rows(db, member.id)
    except SQLAlchemyError as exc:
        _LOG.warning("loading dashboard for member %s failed: %s", member.id, exc)
        console.say("", f"✗ Error loading dashboard: {exc}")
        return
    console.say(*render_dashboard(member, summarize_dashboard(rows), settings.date_format))


async def member_dashboard(console: Console) -> None:
    console.say("", "-- Member Dashboard --")
    member = await select_member_by_name(console)
    if member is None:
        return
    await show_dashboard(console, member)
