"""Selector that prints a numbered list and asks for a number."""

from collections.abc import Callable, Sequence

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from git_identity.domain.shared.error import AmbiguousSelectionError, SelectorError


class PromptSelector:
    """Numbered-menu selection for terminals without fzf."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        ask: Callable[[str], str] | None = None,
    ) -> None:
        self._console = console or Console(stderr=True)
        self._ask = ask or (lambda text: Prompt.ask(text, default="", console=self._console))

    def choose(self, candidates: Sequence[str]) -> str | None:
        if not candidates:
            return None

        table = Table(show_header=False, box=None)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Identity")
        for i, candidate in enumerate(candidates, 1):
            table.add_row(str(i), candidate)
        self._console.print(table)

        answer = self._ask("Select identity (number, empty to cancel)").strip()
        if not answer:
            return None

        parts = answer.replace(",", " ").split()
        if len(parts) > 1:
            raise AmbiguousSelectionError(
                [candidates[int(p) - 1] if _in_range(p, candidates) else p for p in parts]
            )
        if not _in_range(parts[0], candidates):
            raise SelectorError(f"Invalid selection: {parts[0]} (expected 1-{len(candidates)})")
        return candidates[int(parts[0]) - 1]


def _in_range(text: str, candidates: Sequence[str]) -> bool:
    return text.isdecimal() and 1 <= int(text) <= len(candidates)
