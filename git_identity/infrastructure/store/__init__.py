"""ConfigStore implementations."""

from git_identity.infrastructure.store.git import GitConfigStore
from git_identity.infrastructure.store.memory import InMemoryConfigStore

__all__ = ["GitConfigStore", "InMemoryConfigStore"]
