"""Operator prompts: pick one candidate by index, confirm with Y/N."""

from __future__ import annotations

from typing import Protocol, Sequence

from rich.console import Console

from bhelm.core.errors import OperationCancelledError
from bhelm.output.tables import Candidate, candidate_table

CONFIRM_CHOICE = "Do you want to proceed with this repository? (Y/N): "


class Prompter(Protocol):
    """Source of operator answers.

    ``ask`` returns one line of input and raises ``EOFError`` once input is
    exhausted.
    """

    def ask(self, message: str) -> str: ...


class ConsolePrompter:
    """Reads answers from the terminal."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def ask(self, message: str) -> str:
        return self.console.input(message)


class Selector:
    """Interactive disambiguation over a list of candidates.

    Both primitives loop until they get a valid answer; only end of input
    (or process termination) breaks the loop.
    """

    def __init__(self, prompter: Prompter | None = None, console: Console | None = None):
        self.console = console or Console()
        self.prompter = prompter or ConsolePrompter(self.console)

    def _ask(self, message: str) -> str:
        try:
            return self.prompter.ask(message)
        except EOFError as exc:
            raise OperationCancelledError("no selection made: input closed") from exc

    def choose(self, candidates: Sequence[Candidate]) -> int:
        """Show ``candidates`` and return the 0-based index the operator picks."""
        if not candidates:
            raise OperationCancelledError("nothing to select from")

        self.console.print(candidate_table(candidates))
        upper = len(candidates) - 1
        while True:
            answer = self._ask(f"Enter the index of the repository to select (0-{upper}): ")
            try:
                index = int(answer.strip())
            except ValueError:
                index = -1
            if 0 <= index <= upper:
                return index
            self.console.print("[yellow]Invalid selection. Please try again.[/yellow]")

    def confirm(self, prompt: str = CONFIRM_CHOICE) -> bool:
        while True:
            answer = self._ask(prompt).strip().upper()
            if answer == "Y":
                return True
            if answer == "N":
                return False
            self.console.print("[yellow]Invalid input. Please enter Y or N.[/yellow]")
