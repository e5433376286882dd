"""ConfigStore backed by a git config file.

Every operation runs `git config --file <path>`, so the file is read and
written by git itself and stays in git's own format (sections,
subsections, quoting, includes untouched).
"""

import logging
import subprocess
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path

from git_identity.domain.shared.error import (
    NotFoundError,
    StoreReadError,
    StoreWriteError,
)

logger = logging.getLogger(__name__)

# `git config` exit codes
_EXIT_KEY_MISSING = 1  # --get of an absent key
_EXIT_NOTHING_TO_UNSET = 5

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass(frozen=True)
class GitConfigEntry:
    name: str
    value: str | None


class GitConfigStore:
    """Reads and writes one git config file through the git executable."""

    def __init__(self, path: Path, *, git: str = "git", runner: Runner = subprocess.run) -> None:
        self._path = Path(path).expanduser()
        self._git = git
        self._run = runner

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"GitConfigStore({str(self._path)!r})"

    def get_string(self, key: str) -> str:
        if not self._path.exists():
            raise NotFoundError(key)
        result = self._git_config("--null", "--get", key)
        if result.returncode == _EXIT_KEY_MISSING:
            raise NotFoundError(key)
        if result.returncode != 0:
            raise StoreReadError(f"git config --get {key} failed: {result.stderr.strip()}")
        # --null terminates the value with a single NUL and keeps its newlines
        return result.stdout.removesuffix("\0")

    def set_string(self, key: str, value: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        result = self._git_config("--", key, value)
        if result.returncode != 0:
            raise StoreWriteError(key, result.stderr.strip())

    def remove(self, key: str) -> None:
        if not self._path.exists():
            raise NotFoundError(key)
        result = self._git_config("--unset-all", key)
        if result.returncode == _EXIT_NOTHING_TO_UNSET:
            raise NotFoundError(key)
        if result.returncode != 0:
            raise StoreWriteError(key, result.stderr.strip())

    def entries(self, pattern: str | None = None) -> Iterator[GitConfigEntry]:
        if not self._path.exists():
            return
        result = self._git_config("--null", "--list")
        if result.returncode != 0:
            raise StoreReadError(f"Cannot list {self._path}: {result.stderr.strip()}")
        for entry in parse_null_list(result.stdout):
            if pattern is None or fnmatchcase(entry.name, pattern):
                yield entry

    def _git_config(self, *args: str) -> subprocess.CompletedProcess:
        command = [self._git, "config", "--file", str(self._path), *args]
        logger.debug("Running %s", " ".join(command))
        try:
            return self._run(command, capture_output=True, text=True, check=False)
        except OSError as e:
            raise StoreReadError(f"Cannot run {self._git}: {e}") from e


def parse_null_list(output: str) -> list[GitConfigEntry]:
    """Parse `git config --null --list` output.

    Each entry is `key\\nvalue\\0`; a key with no `=` in the file is
    printed as `key\\0` and has no value.
    """
    entries = []
    for record in output.split("\0"):
        if not record:
            continue
        name, newline, value = record.partition("\n")
        entries.append(GitConfigEntry(name=name, value=value if newline else None))
    return entries
