"""CLI utilities (registry construction, error reporting)."""

from git_identity.cli.util.context import open_registry, open_selector
from git_identity.cli.util.errors import reported_errors

__all__ = ["open_registry", "open_selector", "reported_errors"]
