"""Error hierarchy for git-identity.

Error layers:
- GitIdentityError: Base class for all git-identity errors
- DomainError: Identity lifecycle violations (unknown id, no local scope, ...)
- InfrastructureError: Failures of the config store, selector or configuration

The CLI maps every GitIdentityError to a message on stderr and exit code 1.
"""

from collections.abc import Sequence


class GitIdentityError(Exception):
    """Base class for all git-identity errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(GitIdentityError):
    """Base class for identity lifecycle errors."""


class NoSuchIdentityError(DomainError):
    """The requested identity does not exist in the scope."""

    def __init__(self, identity_id: str) -> None:
        super().__init__(f"No identity named '{identity_id}'")
        self.identity_id = identity_id


class NoLocalScopeError(DomainError):
    """The operation needs a local store but none is configured."""

    def __init__(self) -> None:
        super().__init__("No local config available (not inside a git repository?)")


class InconsistentError(DomainError):
    """An identity is listed but one of its required keys is missing."""

    def __init__(self, identity_id: str, key: str) -> None:
        super().__init__(f"Identity '{identity_id}' is listed but '{key}' is missing")
        self.identity_id = identity_id
        self.key = key


class AmbiguousSelectionError(DomainError):
    """The selector returned more than one choice."""

    def __init__(self, choices: Sequence[str]) -> None:
        super().__init__(f"Expected one selection, got {len(choices)}: {', '.join(choices)}")
        self.choices = list(choices)


class EncodingError(DomainError):
    """A field value cannot be stored as a string."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Cannot encode {field} {value!r} as a string")
        self.field = field
        self.value = value


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(GitIdentityError):
    """Base class for store/system errors."""


class StoreError(InfrastructureError):
    """The key-value store rejected an operation."""


class NotFoundError(StoreError):
    """Point read or removal of an absent key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Key not found: {key}")
        self.key = key


class StoreWriteError(StoreError):
    """A write to the store failed."""

    def __init__(self, key: str, reason: str = "") -> None:
        message = f"Failed to write {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.key = key


class StoreReadError(StoreError):
    """Enumerating or reading the store failed."""


class PartialWriteError(InfrastructureError):
    """A multi-key write or removal was only partially applied.

    Attributes:
        written: Keys that were applied before the failure, in order.
        failed: The key whose write or removal failed.
    """

    def __init__(self, written: Sequence[str], failed: str) -> None:
        applied = ", ".join(written) if written else "none"
        super().__init__(f"Stopped at {failed} (already applied: {applied})")
        self.written = list(written)
        self.failed = failed


class SelectorError(InfrastructureError):
    """The interactive selector failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
