"""ConfigStore port - the key-value store identities live in."""

from abc import abstractmethod
from collections.abc import Iterator
from typing import Protocol


class ConfigEntry(Protocol):
    """One key of a store as returned by enumeration."""

    @property
    def name(self) -> str: ...

    @property
    def value(self) -> str | None: ...


class ConfigStore(Protocol):
    """A durable mapping from dotted keys to string values.

    Keys are dotted (`user.work.email`). Enumeration patterns are
    shell-style globs matched against the whole key.
    """

    @abstractmethod
    def get_string(self, key: str) -> str:
        """Read a value.

        Raises:
            NotFoundError: If the key is absent.
        """
        ...

    @abstractmethod
    def set_string(self, key: str, value: str) -> None:
        """Write a value, replacing any existing one.

        Raises:
            StoreWriteError: If the store rejects the write.
        """
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key.

        Raises:
            NotFoundError: If the key is absent.
        """
        ...

    @abstractmethod
    def entries(self, pattern: str | None = None) -> Iterator[ConfigEntry]:
        """Iterate entries whose key matches `pattern` (all when None).

        Raises:
            StoreReadError: If the store cannot be enumerated.
        """
        ...
