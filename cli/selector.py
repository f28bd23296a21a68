from __future__ import annotations

from cli.console import Console
from services.db import Member, get_session
from services.members import search_members


def _label(m: Member) -> str:
    return f"{m.full_name} — {m.email or 'no email'}"


async def select_member_by_name(console: Console) -> Member | None:
    """
    Fuzzy pick: one match is taken as-is, several are listed by index and the
    operator must choose one, none returns None.
    """
    fragment = console.ask("Search member by name (or part of it): ")

    async with get_session() as db:
        members = await search_members(db, fragment)

    if not members:
        console.say("", "✗ No members found with that name.")
        return None

    if len(members) == 1:
        console.say("", f"Found member: {_label(members[0])}")
        return members[0]

    console.say("", "Matching Members:")
    console.say(*(f"{i}) {_label(m)}" for i, m in enumerate(members)))
    index = console.ask_int("Select member by index: ", list(range(len(members))))
    return members[index]
