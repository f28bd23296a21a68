"""
Seed the demo member into an empty club database.

Usage
-----

    python -m scripts.seed_demo

Safe to run repeatedly: nothing is inserted when demo@member.com exists.
"""
from __future__ import annotations

import asyncio

from services.db import create_schema, dispose_engine, get_session
from services.members import DEMO_MEMBER, ensure_demo_member


async def _seed() -> None:
    try:
        await create_schema()
        async with get_session() as db:
            member = await ensure_demo_member(db)
    finally:
        await dispose_engine()

    if member is None:
        print(f"{DEMO_MEMBER.email} already present, nothing to do")
    else:
        print(f"✓ inserted demo member {member.full_name} (id {member.id})")


def main() -> None:
    asyncio.run(_seed())


if __name__ == "__main__":
    main()
