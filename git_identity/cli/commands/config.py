"""Config management commands."""

import json
import sys
from pathlib import Path

import cyclopts

from git_identity.config import default_config_file

app = cyclopts.App(name="config", help="Manage git-identity configuration")

TEMPLATE = """\
# git-identity configuration
# Every setting can also be given as an environment variable,
# e.g. GIT_IDENTITY_SELECTOR=prompt or GIT_IDENTITY_LOGGING__LEVEL=DEBUG

# Interactive chooser for `git-identity set`: auto, fzf or prompt
selector: auto

# Key suffixes that are never removed (compared case-insensitively)
# protected_keys: [useconfigonly]

# Config files (default: git's global config and the repository's .git/config)
# paths:
#   global_config: ~/.gitconfig
#   local_config: null

# logging:
#   level: WARNING
"""


@app.command
def init(path: Path | None = None) -> None:
    """Create a new config file from template.

    Args:
        path: Path for the config file. Defaults to ~/.config/git-identity/config.yaml
    """
    path = path or default_config_file()
    if path.is_dir():
        print(f"Error: {path} is a directory, not a file path", file=sys.stderr)
        sys.exit(1)

    if path.exists():
        print(f"Error: {path} already exists (refusing to overwrite)", file=sys.stderr)
        sys.exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(TEMPLATE)
    print(f"Created config at {path}")


@app.command
def validate(path: Path | None = None) -> None:
    """Validate a config file.

    Args:
        path: Path to the config file. Defaults to ~/.config/git-identity/config.yaml
    """
    import yaml

    from git_identity.config import Config

    path = path or default_config_file()
    if not path.exists():
        print(f"Error: {path} not found", file=sys.stderr)
        sys.exit(1)

    try:
        data = yaml.safe_load(path.read_text()) or {}
        Config.model_validate(data)
        print(f"✓ {path} is valid")
    except Exception as e:
        print(f"✗ {path} is invalid: {e}", file=sys.stderr)
        sys.exit(1)


@app.command
def show() -> None:
    """Show current effective config."""
    from git_identity.config import Config

    config = Config()
    print(json.dumps(config.model_dump(mode="json"), indent=2, default=str))
