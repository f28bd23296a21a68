from __future__ import annotations

import logging

from cli.admin import admin_menu
from cli.console import Console
from cli.member import member_menu
from cli.trainer import trainer_menu
from config import settings
from services.db import create_schema, dispose_engine, get_session, init_engine
from services.members import ensure_demo_member

_LOG = logging.getLogger(__name__)

MENU = [
    (1, "Member"),
    (2, "Trainer"),
    (3, "Administrative Staff"),
    (0, "Exit"),
]


async def seed(console: Console) -> None:
    async with get_session() as db:
        member = await ensure_demo_member(db)
    if member is not None:
        console.say("Seeded demo member.")


async def main_menu(console: Console) -> None:
    menus = {1: member_menu, 2: trainer_menu, 3: admin_menu}
    while True:
        choice = console.menu("Health & Fitness Club Management System", MENU)
        if choice == 0:
            return
        await menus[choice](console)


async def run(console: Console | None = None, database_url: str | None = None) -> int:
    """
    Whole console session: bind the engine, make sure the schema (and the demo
    member) exist, loop the main menu, then release the engine.  Startup
    failures propagate; end of input counts as choosing Exit.
    """
    console = console or Console()
    await init_engine(database_url)
    try:
        await create_schema()
        if settings.seed_demo:
            await seed(console)
        try:
            await main_menu(console)
        except EOFError:
            _LOG.debug("input closed, leaving the main loop")
        console.say("", "Exiting...")
    finally:
        await dispose_engine()
    return 0
