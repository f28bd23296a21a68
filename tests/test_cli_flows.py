"""
Console flows driven end-to-end with scripted input.
"""
from __future__ import annotations

import asyncio
from datetime import datetime

from sqlalchemy import func, select

from cli.app import run
from cli.member import member_add_goal, member_add_metric, member_dashboard, member_register
from cli.selector import select_member_by_name
from cli.trainer import trainer_member_lookup, trainer_set_availability
from cli.admin import admin_billing_payment
from core.models import GoalIn, MemberIn, MetricIn
from services.db import FitnessGoal, HealthMetric, Member, User, get_session
from services.members import DEMO_MEMBER, add_goal, add_metric, create_member


async def _count(model) -> int:
    async with get_session() as db:
        return (await db.execute(select(func.count()).select_from(model))).scalar_one()


async def _add_members(*names: str) -> None:
    async with get_session() as db:
        for name in names:
            email = name.lower().replace(" ", ".") + "@club.com"
            await create_member(
                db, MemberIn(full_name=name, dob="1991-02-03", email=email, phone="555")
            )


# ── selector ────────────────────────────────────────────────────────
def test_selector_reports_absence(run_db, make_console):
    c = make_console("nobody")

    async def scenario():
        await _add_members("Anna Lee")
        return await select_member_by_name(c)

    assert run_db(scenario) is None
    assert "✗ No members found with that name." in c.output


def test_selector_auto_selects_single_match(run_db, make_console):
    c = make_console("lee")

    async def scenario():
        await _add_members("Anna Lee", "Bob Stone")
        return await select_member_by_name(c)

    member = run_db(scenario)
    assert member.full_name == "Anna Lee"
    assert len(c.prompts) == 1
    assert "Found member: Anna Lee — anna.lee@club.com" in c.output


def test_selector_lists_matches_and_accepts_only_valid_index(run_db, make_console):
    c = make_console("anna", "3", "one", "1")

    async def scenario():
        await _add_members("Joanna Park", "Anna Lee", "Annabel Stone", "Bob Stone")
        return await select_member_by_name(c)

    member = run_db(scenario)
    assert member.full_name == "Annabel Stone"
    assert c.output[c.output.index("Matching Members:") + 1:][:3] == [
        "0) Anna Lee — anna.lee@club.com",
        "1) Annabel Stone — annabel.stone@club.com",
        "2) Joanna Park — joanna.park@club.com",
    ]
    assert c.output.count("Please enter a valid number (0, 1, 2).") == 2


# ── registration ────────────────────────────────────────────────────
def test_register_member(run_db, make_console):
    c = make_console("Anna Lee", "1990-01-01", "F", "anna@club.com", "555-2222")

    async def scenario():
        await member_register(c)
        return await _count(Member), await _count(User)

    assert run_db(scenario) == (1, 1)
    assert "✓ Member registered successfully!" in c.output


def test_register_duplicate_email_reports_error(run_db, make_console):
    c = make_console("Someone Else", "1985-06-07", "M", DEMO_MEMBER.email, "555-3333")

    async def scenario():
        async with get_session() as db:
            await create_member(db, DEMO_MEMBER)
        await member_register(c)
        return await _count(Member), await _count(User)

    assert run_db(scenario) == (1, 1)
    assert any(line.startswith("✗ Error registering member:") for line in c.output)


def test_register_rejects_bad_date_before_writing(run_db, make_console):
    c = make_console("Anna Lee", "first of may", "F", "anna@club.com", "555")

    async def scenario():
        await member_register(c)
        return await _count(User)

    assert run_db(scenario) == 0
    assert any("Invalid member details" in line and "dob" in line for line in c.output)


# ── goals / metrics ─────────────────────────────────────────────────
def test_metric_value_must_be_numeric(run_db, make_console):
    c = make_console("Demo", "weight", "abc")

    async def scenario():
        async with get_session() as db:
            await create_member(db, DEMO_MEMBER)
        await member_add_metric(c)
        return await _count(HealthMetric)

    assert run_db(scenario) == 0
    assert "✗ Metric value must be a number." in c.output


def test_add_metric_records_row(run_db, make_console):
    c = make_console("Demo", "weight", "72.5")

    async def scenario():
        async with get_session() as db:
            await create_member(db, DEMO_MEMBER)
        await member_add_metric(c)
        return await _count(HealthMetric)

    assert run_db(scenario) == 1
    assert "✓ Health metric recorded:" in c.output
    assert any("value=72.5" in line for line in c.output)


def test_empty_goal_is_rejected(run_db, make_console):
    c = make_console("Demo", "   ")

    async def scenario():
        async with get_session() as db:
            await create_member(db, DEMO_MEMBER)
        await member_add_goal(c)
        return await _count(FitnessGoal)

    assert run_db(scenario) == 0
    assert "✗ Fitness goal cannot be empty." in c.output


def test_goal_for_unknown_member_aborts(run_db, make_console):
    c = make_console("Ghost")

    async def scenario():
        await member_add_goal(c)
        return await _count(FitnessGoal)

    assert run_db(scenario) == 0
    assert c.prompts == ["Search member by name (or part of it): "]


# ── dashboard ───────────────────────────────────────────────────────
def test_demo_dashboard_shows_most_recent_weight(run_db, make_console):
    c = make_console("demo member")

    async def scenario():
        async with get_session() as db:
            _, m = await create_member(db, DEMO_MEMBER)
            await add_metric(db, m.id, MetricIn(metric_type="weight", value=72.5), datetime(2024, 1, 10))
            await add_metric(db, m.id, MetricIn(metric_type="weight", value=75), datetime(2024, 2, 10))
            await add_goal(db, m.id, GoalIn(goal_text="Run 5k"), datetime(2024, 3, 10))
        await member_dashboard(c)

    run_db(scenario)
    assert "  - weight: 75 (2024-02-10)" in c.output
    assert "  1) Run 5k [2024-03-10]" in c.output
    assert not any("72.5" in line for line in c.output)


def test_trainer_lookup_renders_dashboard(run_db, make_console):
    c = make_console("Demo")

    async def scenario():
        async with get_session() as db:
            await create_member(db, DEMO_MEMBER)
        await trainer_member_lookup(c)

    run_db(scenario)
    assert "Name:  Demo Member" in c.output
    assert c.output.count("  (none)") == 2


# ── stubs ───────────────────────────────────────────────────────────
def test_stubs_accept_input_and_persist_nothing(run_db, make_console):
    c = make_console("coach@club.com", "2024-05-01 09:00", "2024-05-01 10:00", "demo@member.com", "40")

    async def scenario():
        await trainer_set_availability(c)
        await admin_billing_payment(c)
        return await _count(Member)

    assert run_db(scenario) == 0
    assert "[STUB] Would set trainer availability" in c.output
    assert "[STUB] Would handle billing/payment" in c.output
    assert c.answers == []


# ── whole session ───────────────────────────────────────────────────
def test_session_seeds_demo_and_exits_cleanly(db_url, make_console):
    # main → member → dashboard → "Demo" → back → exit
    c = make_console("1", "4", "Demo", "0", "0")
    assert asyncio.run(run(c, db_url)) == 0
    assert "Name:  Demo Member" in c.output
    assert c.output[-1] == "Exiting..."


def test_session_exits_on_end_of_input(db_url, make_console):
    c = make_console("9")
    assert asyncio.run(run(c, db_url)) == 0
    assert "Please enter a valid number (1, 2, 3, 0)." in c.output
    assert c.output[-1] == "Exiting..."
