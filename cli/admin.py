"""Administrative staff menu.  Every flow here is a placeholder: it takes the
operator's input and acknowledges it without touching the store."""
from __future__ import annotations

from cli.console import Console

MENU = [
    (1, "Create & schedule group class"),
    (2, "Assign room / room booking"),
    (3, "Log equipment issue"),
    (4, "View equipment issues"),
    (5, "Generate bill / record payment"),
    (0, "Back"),
]


async def admin_menu(console: Console) -> None:
    flows = {
        1: admin_create_class,
        2: admin_room_booking,
        3: admin_log_equipment_issue,
        4: admin_view_equipment_issues,
        5: admin_billing_payment,
    }
    while True:
        choice = console.menu("Admin Menu", MENU)
        if choice == 0:
            return
        await flows[choice](console)


async def admin_create_class(console: Console) -> None:
    console.say("", "-- Create & Schedule Group Class --")
    console.ask("Class name: ")
    console.ask("Start (YYYY-MM-DD HH:MM): ")
    console.say("[STUB] Would create group class")


async def admin_room_booking(console: Console) -> None:
    console.say("", "-- Room Booking --")
    console.ask("Room: ")
    console.ask("Start (YYYY-MM-DD HH:MM): ")
    console.say("[STUB] Would book room")


async def admin_log_equipment_issue(console: Console) -> None:
    console.say("", "-- Log Equipment Issue --")
    console.ask("Equipment: ")
    console.ask("Issue description: ")
    console.say("[STUB] Would log equipment issue")


async def admin_view_equipment_issues(console: Console) -> None:
    console.say("", "-- View Equipment Issues --")
    console.say("[STUB] Would view equipment issues")


async def admin_billing_payment(console: Console) -> None:
    console.say("", "-- Billing & Payment --")
    console.ask("Member email: ")
    console.ask("Amount: ")
    console.say("[STUB] Would handle billing/payment")
