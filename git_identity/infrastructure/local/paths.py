"""Locates the git config files that back the global and local scopes.

Global config resolution order:
    1. explicit override (settings or --global-config)
    2. $GIT_CONFIG_GLOBAL
    3. ~/.gitconfig, if it exists
    4. $XDG_CONFIG_HOME/git/config (~/.config/git/config), if it exists
    5. ~/.gitconfig

Local config: the `.git/config` of the nearest enclosing repository.
"""

import os
from pathlib import Path


class GitPaths:
    """Resolves git config file locations.

    Supports overriding both files for testing.
    """

    def __init__(
        self,
        *,
        global_config: Path | None = None,
        local_config: Path | None = None,
        cwd: Path | None = None,
    ) -> None:
        """Initialize paths.

        Args:
            global_config: Override the global config file.
            local_config: Override the local config file.
            cwd: Directory to search for a repository from (default: current directory).
        """
        self._global_override = global_config
        self._local_override = local_config
        self._cwd = cwd

    # -------------------------------------------------------------------------
    # Global
    # -------------------------------------------------------------------------

    @property
    def global_config(self) -> Path:
        """The global (per-user) git config file."""
        if self._global_override is not None:
            return self._global_override.expanduser()

        env = os.environ.get("GIT_CONFIG_GLOBAL")
        if env:
            return Path(env).expanduser()

        home_config = Path.home() / ".gitconfig"
        if home_config.exists():
            return home_config

        xdg_config = self.xdg_config_home / "git" / "config"
        if xdg_config.exists():
            return xdg_config

        return home_config

    @property
    def xdg_config_home(self) -> Path:
        env = os.environ.get("XDG_CONFIG_HOME")
        return Path(env) if env else Path.home() / ".config"

    # -------------------------------------------------------------------------
    # Local
    # -------------------------------------------------------------------------

    @property
    def local_config(self) -> Path | None:
        """The repository config file, or None outside a repository."""
        if self._local_override is not None:
            return self._local_override.expanduser()
        return find_local_config(self._cwd or Path.cwd())


def find_local_config(start: Path) -> Path | None:
    """Walk up from `start` until a `.git/config` file is found."""
    directory = start.resolve()
    for candidate in (directory, *directory.parents):
        config = candidate / ".git" / "config"
        if config.is_file():
            return config
    return None
