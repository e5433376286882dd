from git_identity.infrastructure.local.paths import GitPaths, find_local_config

__all__ = ["GitPaths", "find_local_config"]
