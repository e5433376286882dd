"""Selector implementations."""

import shutil
from typing import Literal

from git_identity.domain.identity.port import Selector
from git_identity.domain.shared.error import ConfigurationError
from git_identity.infrastructure.selector.fzf import FzfSelector
from git_identity.infrastructure.selector.prompt import PromptSelector

SelectorKind = Literal["auto", "fzf", "prompt"]


def make_selector(kind: SelectorKind = "auto") -> Selector:
    """Build the selector for a configured kind.

    `auto` uses fzf when it is on PATH and the numbered prompt otherwise.
    """
    if kind == "prompt":
        return PromptSelector()
    fzf = shutil.which("fzf")
    if fzf:
        return FzfSelector(fzf)
    if kind == "fzf":
        raise ConfigurationError("selector is 'fzf' but fzf was not found on PATH")
    return PromptSelector()


__all__ = ["FzfSelector", "PromptSelector", "SelectorKind", "make_selector"]
