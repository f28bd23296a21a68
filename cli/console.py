"""
Prompt / print handle shared by every menu.

Input and output are injectable so tests can script a whole session.
"""
from __future__ import annotations

from typing import Callable, Iterable, Sequence


class Console:
    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._print = print_fn

    def say(self, *lines: str) -> None:
        for line in lines:
            self._print(line)

    def ask(self, question: str) -> str:
        """Prompt once; raises EOFError when input is exhausted."""
        return self._input(question).strip()

    def ask_int(self, question: str, allowed: Sequence[int] | None = None) -> int:
        """Prompt until the answer is an integer (inside `allowed`, if given)."""
        while True:
            answer = self.ask(question)
            try:
                num = int(answer)
            except ValueError:
                num = None
            if num is not None and (allowed is None or num in allowed):
                return num
            hint = f" ({', '.join(str(a) for a in allowed)})" if allowed is not None else ""
            self.say(f"Please enter a valid number{hint}.")

    def menu(self, title: str, options: Iterable[tuple[int, str]]) -> int:
        """Print a numbered menu and return the chosen key."""
        options = list(options)
        self.say("", f"=== {title} ===", *(f"{key}) {label}" for key, label in options))
        return self.ask_int("> ", [key for key, _ in options])
