"""Builds the registry and selector a command works with."""

import logging

from git_identity.config import Config
from git_identity.domain.identity.codec import NamespaceCodec
from git_identity.domain.identity.port import Selector
from git_identity.domain.identity.service import IdentityRegistry
from git_identity.infrastructure.local import GitPaths
from git_identity.infrastructure.selector import make_selector
from git_identity.infrastructure.store import GitConfigStore

logger = logging.getLogger(__name__)


def open_registry(config: Config, paths: GitPaths | None = None) -> IdentityRegistry:
    """Registry over the global config and, inside a repository, the local one."""
    paths = paths or GitPaths(
        global_config=config.paths.global_config,
        local_config=config.paths.local_config,
    )
    global_path = paths.global_config
    local_path = paths.local_config
    logger.debug("Global config: %s, local config: %s", global_path, local_path)

    return IdentityRegistry(
        GitConfigStore(global_path),
        GitConfigStore(local_path) if local_path is not None else None,
        codec=NamespaceCodec(config.namespace),
        protected_keys=config.protected_keys,
    )


def open_selector(config: Config) -> Selector:
    return make_selector(config.selector)
