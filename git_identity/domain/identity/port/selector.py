"""Selector port - interactive choice of one item."""

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol


class Selector(Protocol):
    @abstractmethod
    def choose(self, candidates: Sequence[str]) -> str | None:
        """Let the user pick one candidate.

        Returns None when nothing was picked.

        Raises:
            AmbiguousSelectionError: If more than one candidate was picked.
        """
        ...
