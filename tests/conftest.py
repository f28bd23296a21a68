from __future__ import annotations

import asyncio
import time

import pytest

from cli.console import Console
from services.db import create_schema, dispose_engine, init_engine


class ScriptedConsole(Console):
    """Console fed from a fixed list of answers; records prompts and output."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.output: list[str] = []
        super().__init__(input_fn=self._next, print_fn=self.output.append)

    def _next(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def make_console():
    return ScriptedConsole


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'club.db'}"


@pytest.fixture
def run_db(db_url):
    """Run an async callable against a fresh schema in its own event loop."""

    def _run(fn):
        async def _wrapped():
            await init_engine(db_url)
            await create_schema()
            try:
                return await fn()
            finally:
                await dispose_engine()

        return asyncio.run(_wrapped())

    return _run


@pytest.fixture(autouse=True)
def utc_local_time(monkeypatch):
    """Pin the process time zone; tests that need another one setenv TZ + tzset."""
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def local_tz(monkeypatch):
    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    return _set
