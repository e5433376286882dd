"""In-memory ConfigStore for tests and dry runs."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from fnmatch import fnmatchcase

from git_identity.domain.shared.error import NotFoundError, StoreWriteError


@dataclass(frozen=True)
class MemoryEntry:
    name: str
    value: str | None


class InMemoryConfigStore:
    """Dict-backed store.

    Args:
        entries: Initial contents.
        fail_on_set: Keys whose write is rejected with StoreWriteError.
    """

    def __init__(
        self,
        entries: Mapping[str, str | None] | None = None,
        *,
        fail_on_set: set[str] | None = None,
    ) -> None:
        self._entries: dict[str, str | None] = dict(entries or {})
        self.fail_on_set = set(fail_on_set or ())

    def get_string(self, key: str) -> str:
        if key not in self._entries:
            raise NotFoundError(key)
        return self._entries[key] or ""

    def set_string(self, key: str, value: str) -> None:
        if key in self.fail_on_set:
            raise StoreWriteError(key, "rejected")
        self._entries[key] = value

    def remove(self, key: str) -> None:
        if key not in self._entries:
            raise NotFoundError(key)
        del self._entries[key]

    def entries(self, pattern: str | None = None) -> Iterator[MemoryEntry]:
        for name, value in list(self._entries.items()):
            if pattern is None or fnmatchcase(name, pattern):
                yield MemoryEntry(name=name, value=value)

    def as_dict(self) -> dict[str, str | None]:
        """Snapshot of the contents."""
        return dict(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
