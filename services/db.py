"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for the four club tables + the dashboard view
* Engine / session lifecycle used by the console and scripts
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import AsyncIterator

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    event,
    text,
)
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

_LOG = logging.getLogger(__name__)

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


def _enable_sqlite_fks(dbapi_conn, _record) -> None:
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def _create_engine(url: str) -> AsyncEngine:
    eng = create_async_engine(url, pool_pre_ping=True, echo=settings.sql_echo)
    if eng.dialect.name == "sqlite":
        # sqlite only checks FOREIGN KEY clauses when asked to, per connection
        event.listen(eng.sync_engine, "connect", _enable_sqlite_fks)
    return eng


async def init_engine(url: str | None = None) -> AsyncEngine:
    """(Re)bind the module engine, defaulting to DATABASE_URL."""
    global _ENGINE
    if _ENGINE is not None:
        await _ENGINE.dispose()
    _ENGINE = _create_engine(url or settings.database_url)
    _LOG.debug("engine bound to %s", _ENGINE.url.render_as_string(hide_password=True))
    return _ENGINE


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = _create_engine(settings.database_url)
    return _ENGINE


async def dispose_engine() -> None:
    global _ENGINE
    if _ENGINE is not None:
        await _ENGINE.dispose()
        _ENGINE = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Aware UTC copy; naive input is read as local wall-clock time."""
    return value.astimezone(timezone.utc)


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)

# ───────── models ────────────────────────────────────────────────────


class User(Base):
    """Identity anchor; every role profile hangs off one of these."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)


class Member(Base):
    __tablename__ = "members"

    id:        Mapped[int]        = mapped_column(primary_key=True)
    user_id:   Mapped[int]        = mapped_column(ForeignKey("users.id"), unique=True)
    full_name: Mapped[str]        = mapped_column(String(200), index=True)
    dob:       Mapped[date | None] = mapped_column(Date)
    gender:    Mapped[str | None] = mapped_column(String(50))
    email:     Mapped[str]        = mapped_column(String(255), unique=True)
    phone:     Mapped[str | None] = mapped_column(String(50))
    created_at: Mapped[datetime]  = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, full_name='{self.full_name}', email='{self.email}')>"


class FitnessGoal(Base):
    __tablename__ = "fitness_goals"

    id:         Mapped[int]      = mapped_column(primary_key=True)
    member_id:  Mapped[int]      = mapped_column(ForeignKey("members.id"), index=True)
    goal_text:  Mapped[str]      = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class HealthMetric(Base):
    __tablename__ = "health_metrics"

    id:          Mapped[int]      = mapped_column(primary_key=True)
    member_id:   Mapped[int]      = mapped_column(ForeignKey("members.id"), index=True)
    metric_type: Mapped[str]      = mapped_column(String(100))
    value:       Mapped[float]    = mapped_column(Float)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


# ───────── dashboard view ────────────────────────────────────────────
# Kept out of Base.metadata so create_all never tries to build it as a table.
DASHBOARD_VIEW = "member_dashboard_view"

_view_metadata = MetaData()

member_dashboard_view = Table(
    DASHBOARD_VIEW,
    _view_metadata,
    Column("member_id", Integer),
    Column("metric_id", Integer),
    Column("metric_type", String),
    Column("metric_value", Float),
    Column("metric_recorded_at", DateTime(timezone=True)),
    Column("goal_id", Integer),
    Column("goal_text", Text),
    Column("goal_created_at", DateTime(timezone=True)),
)

# one row per (metric, goal) pairing; members with neither still get a row
_CREATE_DASHBOARD_VIEW = f"""
CREATE VIEW {DASHBOARD_VIEW} AS
SELECT m.id            AS member_id,
       hm.id           AS metric_id,
       hm.metric_type  AS metric_type,
       hm.value        AS metric_value,
       hm.recorded_at  AS metric_recorded_at,
       fg.id           AS goal_id,
       fg.goal_text    AS goal_text,
       fg.created_at   AS goal_created_at
FROM members m
LEFT JOIN health_metrics hm ON hm.member_id = m.id
LEFT JOIN fitness_goals  fg ON fg.member_id = m.id
"""


async def create_schema() -> None:
    """Create missing tables and (re)create the dashboard view."""
    eng = await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(text(f"DROP VIEW IF EXISTS {DASHBOARD_VIEW}"))
        await conn.execute(text(_CREATE_DASHBOARD_VIEW))
    _LOG.debug("schema ready (%d tables + %s)", len(Base.metadata.tables), DASHBOARD_VIEW)


# ───────── session helper ────────────────────────────────────────────

@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    eng = await engine()
    async_session = async_sessionmaker(eng, expire_on_commit=False)
    async with async_session() as session:
        yield session
