"""Identity fields and store scopes."""

from enum import Enum


class IdentityField(str, Enum):
    """Closed set of terminal key segments that belong to an identity.

    The enum value is the key segment as stored; `attribute` is the
    matching Identity attribute.
    """

    NAME = "name"
    EMAIL = "email"
    SIGNING_KEY = "signingkey"
    SSH_KEY = "sshkey"

    @property
    def attribute(self) -> str:
        return _ATTRIBUTES[self]

    @property
    def required(self) -> bool:
        return self in (IdentityField.NAME, IdentityField.EMAIL)

    @classmethod
    def parse(cls, segment: str) -> "IdentityField | None":
        """Return the field for a key segment, or None.

        Git lowercases variable names, so matching ignores case.
        """
        try:
            return cls(segment.lower())
        except ValueError:
            return None


_ATTRIBUTES: dict[IdentityField, str] = {
    IdentityField.NAME: "name",
    IdentityField.EMAIL: "email",
    IdentityField.SIGNING_KEY: "signing_key",
    IdentityField.SSH_KEY: "ssh_key",
}


class Scope(str, Enum):
    """Which store an operation targets."""

    GLOBAL = "global"
    LOCAL = "local"
