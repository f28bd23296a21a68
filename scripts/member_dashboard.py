#!/usr/bin/env python3
"""
Print one member's dashboard without the interactive menus.
Usage:
    python -m scripts.member_dashboard "Demo Member" [--date-format %d/%m/%Y]

The name must match exactly; the first member by id wins when several do.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from config import settings
from core.dashboard import render_dashboard, summarize_dashboard
from services.db import dispose_engine, get_session
from services.members import fetch_dashboard_rows, find_member_by_name

_LOG = logging.getLogger(__name__)


async def show(full_name: str, date_format: str) -> int:
    try:
        async with get_session() as db:
            member = await find_member_by_name(db, full_name)
            if member is None:
                print(f"✗ Member not found: {full_name}")
                return 1
            rows = await fetch_dashboard_rows(db, member.id)
    except SQLAlchemyError as exc:
        _LOG.warning("dashboard lookup for %r failed: %s", full_name, exc)
        print(f"✗ Error loading dashboard: {getattr(exc, 'orig', None) or exc}")
        return 1
    finally:
        await dispose_engine()

    for line in render_dashboard(member, summarize_dashboard(rows), date_format):
        print(line)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("full_name", help="member full name, exact match")
    parser.add_argument(
        "--date-format",
        default=settings.date_format,
        help="strftime pattern for metric / goal dates",
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(show(args.full_name, args.date_format)))


if __name__ == "__main__":
    main()
