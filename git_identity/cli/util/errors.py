"""Maps git-identity errors to CLI output."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager

import pydantic
from rich.markup import escape

from git_identity.cli.console import Console
from git_identity.domain.shared.error import (
    GitIdentityError,
    InconsistentError,
    NoLocalScopeError,
    NoSuchIdentityError,
    PartialWriteError,
)


def hint_for(error: GitIdentityError) -> str | None:
    """Follow-up advice for errors the user can act on."""
    if isinstance(error, NoSuchIdentityError):
        return "Run 'git-identity list' to see available identities"
    if isinstance(error, NoLocalScopeError):
        return "Run this command inside a git repository"
    if isinstance(error, InconsistentError):
        return f"Add the missing key or remove the identity: git-identity remove --global --identity {escape(error.identity_id)}"
    if isinstance(error, PartialWriteError):
        return "The config was left partially updated; re-run the command to retry"
    return None


@contextmanager
def reported_errors(console: Console) -> Iterator[None]:
    """Print errors raised by the block and exit with status 1."""
    try:
        yield
    except GitIdentityError as e:
        console.error(escape(e.message), hint=hint_for(e))
        sys.exit(1)
    except pydantic.ValidationError as e:
        for problem in e.errors():
            location = ".".join(str(part) for part in problem["loc"])
            console.error(escape(f"{location}: {problem['msg']}" if location else problem["msg"]))
        sys.exit(1)
