"""Identity commands (add, list, set, remove, current)."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.markup import escape

from git_identity.cli.console import get_console
from git_identity.cli.util import open_registry, open_selector, reported_errors
from git_identity.config import Config
from git_identity.domain.identity.model import Identity, Scope


def _scope(local: bool) -> Scope:
    return Scope.LOCAL if local else Scope.GLOBAL


def add(
    *,
    id: Annotated[str, Parameter(name=["--id", "-i"])],
    name: Annotated[str, Parameter(name=["--name", "-n"])],
    email: Annotated[str, Parameter(name=["--email", "-e"])],
    signing_key: Annotated[str | None, Parameter(name=["--signing-key", "-s"])] = None,
    ssh_key: Annotated[Path | None, Parameter(name=["--ssh-key", "-S"])] = None,
    local: bool = False,
) -> None:
    """Add an identity (replaces an existing one with the same id).

    Args:
        id: Name of the identity.
        name: Your name.
        email: Your email.
        signing_key: Optional gpg signing key id.
        ssh_key: Optional path to an SSH key.
        local: Store the identity in the repository config instead of the global one.
    """
    console = get_console()
    with reported_errors(console):
        identity = Identity(id=id, name=name, email=email, signing_key=signing_key, ssh_key=ssh_key)
        registry = open_registry(Config())
        scope = _scope(local)
        existed = identity.id in registry.list(scope)
        registry.add(scope, identity)

    verb = "Updated" if existed else "Added"
    console.success(f"{verb} identity [bold]{escape(identity.id)}[/bold] ({scope.value})")


def list_identities(*, verbose: bool = False, local: bool = False) -> None:
    """List available identities.

    Args:
        verbose: Show every field in a table.
        local: List identities stored in the repository config.
    """
    console = get_console()
    with reported_errors(console):
        registry = open_registry(Config())
        scope = _scope(local)
        if not verbose:
            ids = sorted(registry.list(scope))
        else:
            identities = registry.identities(scope)
            ids = [identity.id for identity in identities]
            active = registry.current()

    if not ids:
        console.warning(f"No identities found in the {scope.value} config")
        return

    if not verbose:
        console.print_lines(ids)
        return

    active_id = active.id if active else None
    rows = [
        {
            "active": "*" if identity.id == active_id else "",
            "id": escape(identity.id),
            "name": escape(identity.name) or "[red]missing[/red]",
            "email": escape(identity.email) or "[red]missing[/red]",
            "signing_key": escape(identity.signing_key or ""),
            "ssh_key": escape(str(identity.ssh_key or "")),
        }
        for identity in identities
    ]
    console.table(
        rows,
        [
            ("active", ""),
            ("id", "Identity"),
            ("name", "Name"),
            ("email", "Email"),
            ("signing_key", "Signing key"),
            ("ssh_key", "SSH key"),
        ],
    )


def set_identity(identity: str | None = None, /) -> None:
    """Set the identity for the current repository.

    Args:
        identity: Identity to activate; choose interactively when omitted.
    """
    console = get_console()
    with reported_errors(console):
        config = Config()
        registry = open_registry(config)
        if identity is not None:
            chosen = registry.activate(identity)
        else:
            if not registry.list(Scope.GLOBAL):
                console.warning("No identities to choose from")
                console.info("Add one with: git-identity add --id ID --name NAME --email EMAIL")
                return
            chosen = registry.select(open_selector(config))

    if chosen is None:
        console.info("No identity selected")
        return
    console.success(f"Using [bold]{escape(chosen.id)}[/bold]: {escape(chosen.name)} <{escape(chosen.email)}>")


def remove(
    *,
    force: Annotated[bool, Parameter(name=["--force", "-f"])] = False,
    global_: Annotated[bool, Parameter(name="--global")] = False,
    identity: Annotated[str | None, Parameter(name=["--identity", "-i"])] = None,
) -> None:
    """Remove the identity from this repository or one from the global list.

    Args:
        force: Act out the removal (nothing happens without this flag).
        global_: Remove from the global identity list.
        identity: Identity name, required with --global.
    """
    console = get_console()
    with reported_errors(console):
        registry = open_registry(Config())
        if global_:
            if identity is None:
                console.error("identity required when removing global identity")
                raise SystemExit(1)
            keys = registry.plan_remove(Scope.GLOBAL, identity)
        else:
            keys = registry.plan_remove_all_active()

        if not keys:
            console.warning("Nothing to remove")
            return

        if not force:
            console.warning("-f/--force not given, no action will be taken")
            console.info("Would remove:")
            console.print_lines([f"  {key}" for key in keys])
            return

        if global_:
            removed = registry.remove(Scope.GLOBAL, identity)
        else:
            removed = registry.remove_all_active()

    console.success(f"Removed {len(removed)} key{'s' if len(removed) != 1 else ''}")


def current() -> None:
    """Get the currently active identity for this repository."""
    console = get_console()
    with reported_errors(console):
        active = open_registry(Config()).current()

    if active is None:
        console.print("none set")
        return
    line = f"{active.name} ({active.email})"
    if active.id:
        line = f"{line} [{active.id}]"
    console.print_lines([line])
