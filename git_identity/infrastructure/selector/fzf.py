"""Selector that runs fzf."""

import logging
import subprocess
from collections.abc import Callable, Sequence

from git_identity.domain.shared.error import AmbiguousSelectionError, SelectorError

logger = logging.getLogger(__name__)

# fzf exit codes
_NO_MATCH = 1
_INTERRUPTED = 130


class FzfSelector:
    """Pipes the candidates to fzf and reads the chosen line back."""

    def __init__(
        self,
        executable: str = "fzf",
        *,
        prompt: str = "identity> ",
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self._executable = executable
        self._prompt = prompt
        self._run = runner

    def choose(self, candidates: Sequence[str]) -> str | None:
        if not candidates:
            return None

        command = [self._executable, "--prompt", self._prompt, "--height", "40%", "--reverse"]
        logger.debug("Running %s with %d candidates", self._executable, len(candidates))
        try:
            # stderr stays attached to the terminal so fzf can draw its UI
            result = self._run(
                command,
                input="\n".join(candidates) + "\n",
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as e:
            raise SelectorError(f"Cannot run {self._executable}: {e}") from e

        if result.returncode in (_NO_MATCH, _INTERRUPTED):
            return None
        if result.returncode != 0:
            raise SelectorError(f"{self._executable} exited with status {result.returncode}")

        chosen = [line for line in result.stdout.splitlines() if line]
        if not chosen:
            return None
        if len(chosen) > 1:
            raise AmbiguousSelectionError(chosen)
        return chosen[0]
