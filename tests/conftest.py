"""Global test fixtures."""

from pathlib import Path

import pytest

from git_identity.domain.identity.codec import NamespaceCodec
from git_identity.domain.identity.service import IdentityRegistry
from git_identity.infrastructure.store import InMemoryConfigStore


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the user's own git and git-identity configuration out of tests."""
    for name in ("GIT_IDENTITY_SELECTOR", "GIT_IDENTITY_NAMESPACE", "GIT_IDENTITY_LOG_FILE",
                 "GIT_IDENTITY_PROTECTED_KEYS", "GIT_CONFIG_GLOBAL", "XDG_CONFIG_HOME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GIT_IDENTITY_CONFIG_FILE", str(tmp_path / "no-such-config.yaml"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def global_store() -> InMemoryConfigStore:
    return InMemoryConfigStore()


@pytest.fixture
def local_store() -> InMemoryConfigStore:
    return InMemoryConfigStore()


@pytest.fixture
def codec() -> NamespaceCodec:
    return NamespaceCodec()


@pytest.fixture
def registry(global_store: InMemoryConfigStore, local_store: InMemoryConfigStore) -> IdentityRegistry:
    return IdentityRegistry(global_store, local_store)
