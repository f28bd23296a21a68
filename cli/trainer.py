from __future__ import annotations

from cli.console import Console
from cli.member import show_dashboard
from cli.selector import select_member_by_name

MENU = [
    (1, "Set availability slot"),
    (2, "View my schedule"),
    (3, "Lookup member (read-only)"),
    (0, "Back"),
]


async def trainer_menu(console: Console) -> None:
    flows = {
        1: trainer_set_availability,
        2: trainer_view_schedule,
        3: trainer_member_lookup,
    }
    while True:
        choice = console.menu("Trainer Menu", MENU)
        if choice == 0:
            return
        await flows[choice](console)


# TODO: persist once a trainer_availability table exists
async def trainer_set_availability(console: Console) -> None:
    console.say("", "-- Set Availability Slot --")
    console.ask("Trainer email: ")
    console.ask("Availability start (YYYY-MM-DD HH:MM): ")
    console.ask("Availability end (YYYY-MM-DD HH:MM): ")
    console.say("[STUB] Would set trainer availability")


async def trainer_view_schedule(console: Console) -> None:
    console.say("", "-- View Trainer Schedule --")
    console.ask("Trainer email: ")
    console.say("[STUB] Would show trainer schedule")


async def trainer_member_lookup(console: Console) -> None:
    console.say("", "-- Member Lookup (Read-Only) --")
    member = await select_member_by_name(console)
    if member is None:
        return
    await show_dashboard(console, member)
