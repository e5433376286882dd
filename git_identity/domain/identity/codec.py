"""NamespaceCodec - maps identities to and from namespaced config keys.

Key layout:
    <namespace>.<id>.<field>    one identity among many (global store)
    <namespace>.<field>         the active identity (local store)

An id may itself contain the separator ("work.client-a"), so the only
way to find where the id ends is the closed set of field segments. Keys
are decoded by taking the last segment that is a field word as the field
and everything between the namespace and that segment as the id.

That rule is ambiguous for keys that carry extra segments after a field
word: "user.a.name.x" decodes as id "a", field "name", although git reads
it as subsection "a.name", variable "x".
"""

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from git_identity.domain.identity.model import ActiveIdentity, Identity, IdentityField
from git_identity.domain.shared.error import EncodingError

SEPARATOR = "."
DEFAULT_NAMESPACE = "user"

Pair = tuple[str, str]


def _optional_text(value: str) -> str | None:
    return value or None


# Field -> parser of the stored string into the attribute value
_DECODERS: dict[IdentityField, Callable[[str], Any]] = {
    IdentityField.NAME: str,
    IdentityField.EMAIL: str,
    IdentityField.SIGNING_KEY: _optional_text,
    IdentityField.SSH_KEY: Path,
}


class NamespaceCodec:
    """Bidirectional mapping between Identity and (key, value) pairs."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        if not namespace or SEPARATOR in namespace:
            raise ValueError(f"invalid namespace {namespace!r}")
        self.namespace = namespace

    # -------------------------------------------------------------------------
    # Keys and patterns
    # -------------------------------------------------------------------------

    def key(self, identity_id: str, field: IdentityField) -> str:
        """Scoped key of one field, e.g. user.work.email."""
        return SEPARATOR.join((self.namespace, identity_id, field.value))

    def active_key(self, field: IdentityField) -> str:
        """Unscoped key of one field, e.g. user.email."""
        return SEPARATOR.join((self.namespace, field.value))

    def id_prefix(self, identity_id: str) -> str:
        return f"{self.namespace}{SEPARATOR}{identity_id}{SEPARATOR}"

    @property
    def identity_pattern(self) -> str:
        """Glob of keys that can belong to an identity (namespace + id + field)."""
        return f"{self.namespace}{SEPARATOR}*{SEPARATOR}*"

    @property
    def namespace_pattern(self) -> str:
        """Glob of every key under the namespace."""
        return f"{self.namespace}{SEPARATOR}*"

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def encode(self, identity: Identity) -> list[Pair]:
        """Encode an identity as scoped pairs.

        Always yields name and email (in that order), then signingkey and
        sshkey when set.

        Raises:
            EncodingError: If the ssh key path is not representable as text.
        """
        return [
            (self.key(identity.id, field), value)
            for field, value in self._field_values(identity)
        ]

    def encode_active(self, identity: Identity) -> list[Pair]:
        """Encode an identity as unscoped pairs for the active slot."""
        return [
            (self.active_key(field), value)
            for field, value in self._field_values(identity)
        ]

    def _field_values(self, identity: Identity) -> list[tuple[IdentityField, str]]:
        values = [
            (IdentityField.NAME, identity.name),
            (IdentityField.EMAIL, identity.email),
        ]
        if identity.signing_key is not None:
            values.append((IdentityField.SIGNING_KEY, identity.signing_key))
        if identity.ssh_key is not None:
            values.append((IdentityField.SSH_KEY, _path_to_text(identity.ssh_key)))
        return values

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def decode_id(self, full_key: str) -> tuple[str, IdentityField] | None:
        """Split a scoped key into (id, field).

        Returns None for keys outside the namespace, keys without a field
        segment, and unscoped keys such as user.name.
        """
        segments = full_key.split(SEPARATOR)
        if len(segments) < 3 or segments[0] != self.namespace:
            return None
        rest = segments[1:]
        for index in range(len(rest) - 1, -1, -1):
            field = IdentityField.parse(rest[index])
            if field is not None:
                identity_id = SEPARATOR.join(rest[:index])
                if not identity_id:
                    return None
                return identity_id, field
        return None

    def decode_active_field(self, full_key: str) -> IdentityField | None:
        """Field of an unscoped key such as user.email, else None."""
        segments = full_key.split(SEPARATOR)
        if len(segments) != 2 or segments[0] != self.namespace:
            return None
        return IdentityField.parse(segments[1])

    def decode(self, identity_id: str, values: Mapping[IdentityField, str]) -> Identity:
        """Build an Identity from the field values stored under one id.

        Missing fields keep their defaults; an empty signing key decodes
        to None.
        """
        attributes = {
            field.attribute: _DECODERS[field](value) for field, value in values.items()
        }
        return Identity(id=identity_id, **attributes)

    def decode_active(self, values: Mapping[IdentityField, str]) -> ActiveIdentity:
        attributes = {
            field.attribute: _DECODERS[field](value) for field, value in values.items()
        }
        attributes.setdefault("name", "")
        attributes.setdefault("email", "")
        return ActiveIdentity(**attributes)

    def group(self, pairs: Iterable[tuple[str, str | None]]) -> dict[str, dict[IdentityField, str]]:
        """Group scoped (key, value) pairs by identity id.

        Keys that do not decode are skipped; a valueless key counts as
        an empty string.
        """
        grouped: dict[str, dict[IdentityField, str]] = {}
        for key, value in pairs:
            decoded = self.decode_id(key)
            if decoded is None:
                continue
            identity_id, field = decoded
            grouped.setdefault(identity_id, {})[field] = value or ""
        return grouped


def _path_to_text(path: Path) -> str:
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(IdentityField.SSH_KEY.value, path) from e
    return text
