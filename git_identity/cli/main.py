"""Main CLI application using Cyclopts.

Each command builds its own registry from the effective config: the
global git config plus, inside a repository, its .git/config.
"""

import sys

import cyclopts
import pydantic

from git_identity import __version__
from git_identity.cli.commands import config, identity
from git_identity.config import Config, LoggingConfig, configure_logging

app = cyclopts.App(
    name="git-identity",
    help="Manage git identities",
    version=__version__,
)

app.command(identity.add, name="add")
app.command(identity.list_identities, name="list")
app.command(identity.set_identity, name="set")
app.command(identity.remove, name="remove")
app.command(identity.current, name="current")
app.command(config.app, name="config")


def run() -> None:
    """Console script entry point."""
    try:
        logging_config = Config().logging
    except pydantic.ValidationError as e:
        # Commands report the problem; `config validate` must still run
        print(f"Warning: invalid configuration ({e.error_count()} errors)", file=sys.stderr)
        logging_config = LoggingConfig()
    configure_logging(logging_config)
    app()


if __name__ == "__main__":
    run()
