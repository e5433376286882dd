"""IdentityRegistry - identity lifecycle over a global and a local store."""

from __future__ import annotations

import glob
import logging
from collections.abc import Iterable, Sequence

from git_identity.domain.identity.codec import NamespaceCodec, Pair
from git_identity.domain.identity.model import ActiveIdentity, Identity, IdentityField, Scope
from git_identity.domain.identity.port import ConfigStore, Selector
from git_identity.domain.shared.error import (
    InconsistentError,
    NoLocalScopeError,
    NoSuchIdentityError,
    NotFoundError,
    PartialWriteError,
    StoreError,
)

logger = logging.getLogger(__name__)

DEFAULT_PROTECTED_KEYS = frozenset({"useconfigonly"})


class IdentityRegistry:
    """Lists, reads, writes, removes and activates identities.

    Owns one global store and optionally one local store. Multi-key writes
    are not atomic: a store failure midway raises PartialWriteError naming
    the keys already applied.

    The global store holds any number of identities under
    `<namespace>.<id>.<field>`; the local store holds the single active
    identity under `<namespace>.<field>`.
    """

    def __init__(
        self,
        global_store: ConfigStore,
        local_store: ConfigStore | None = None,
        *,
        codec: NamespaceCodec | None = None,
        protected_keys: Iterable[str] = DEFAULT_PROTECTED_KEYS,
    ) -> None:
        self._global = global_store
        self._local = local_store
        self._codec = codec or NamespaceCodec()
        self._protected = frozenset(k.lower() for k in protected_keys)

    @property
    def codec(self) -> NamespaceCodec:
        return self._codec

    @property
    def has_local(self) -> bool:
        return self._local is not None

    def store(self, scope: Scope) -> ConfigStore:
        """Store backing a scope.

        Raises:
            NoLocalScopeError: If the local scope is requested but not configured.
        """
        if scope is Scope.GLOBAL:
            return self._global
        if self._local is None:
            raise NoLocalScopeError()
        return self._local

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, scope: Scope = Scope.GLOBAL) -> set[str]:
        """Distinct ids with at least one field key in the scope."""
        store = self.store(scope)
        ids: set[str] = set()
        for entry in store.entries(self._codec.identity_pattern):
            decoded = self._codec.decode_id(entry.name)
            if decoded is not None:
                ids.add(decoded[0])
        return ids

    def get(self, scope: Scope, identity_id: str) -> Identity | None:
        """Read one identity, or None if the id is not listed.

        Raises:
            InconsistentError: If the id is listed but name or email is missing.
        """
        if identity_id not in self.list(scope):
            return None

        store = self.store(scope)
        values: dict[IdentityField, str] = {}
        for field in IdentityField:
            key = self._codec.key(identity_id, field)
            try:
                values[field] = store.get_string(key)
            except NotFoundError:
                if field.required:
                    raise InconsistentError(identity_id, key) from None
        return self._codec.decode(identity_id, values)

    def identities(self, scope: Scope = Scope.GLOBAL) -> list[Identity]:
        """Every identity in the scope, decoded from a single enumeration.

        Unlike `get`, incomplete identities are returned as they are.
        """
        store = self.store(scope)
        grouped = self._codec.group(
            (entry.name, entry.value) for entry in store.entries(self._codec.identity_pattern)
        )
        return [self._codec.decode(identity_id, grouped[identity_id]) for identity_id in sorted(grouped)]

    def current(self) -> ActiveIdentity | None:
        """The active identity of the local scope (global when there is none).

        Returns None when the active name or email is not set. The id is
        filled in when exactly one global identity carries the same values.
        """
        store = self._local if self._local is not None else self._global
        values: dict[IdentityField, str] = {}
        for field in IdentityField:
            try:
                values[field] = store.get_string(self._codec.active_key(field))
            except NotFoundError:
                continue
        if not values.get(IdentityField.NAME) or not values.get(IdentityField.EMAIL):
            return None

        active = self._codec.decode_active(values)
        matches = [i.id for i in self.identities(Scope.GLOBAL) if active.matches(i)]
        if len(matches) == 1:
            return active.model_copy(update={"id": matches[0]})
        return active

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, scope: Scope, identity: Identity) -> list[str]:
        """Write an identity, overwriting fields of an existing one.

        Returns:
            The keys written.

        Raises:
            EncodingError: If a field cannot be encoded.
            PartialWriteError: If the store rejects one of the writes.
        """
        pairs = self._codec.encode(identity)
        written = self._write(self.store(scope), pairs)
        logger.info("Added identity %r to %s config", identity.id, scope.value)
        return written

    def plan_remove(self, scope: Scope, identity_id: str) -> list[str]:
        """Keys `remove` would delete for this id."""
        store = self.store(scope)
        prefix = self._codec.id_prefix(identity_id)
        keys = []
        for entry in store.entries(glob.escape(prefix) + "*"):
            if self._owned_by(entry.name, identity_id, prefix) and not self._is_protected(entry.name):
                keys.append(entry.name)
        return keys

    def remove(self, scope: Scope, identity_id: str) -> list[str]:
        """Delete every unprotected key of one identity.

        Removing an id that is not present is a no-op and returns [].

        Raises:
            PartialWriteError: If a deletion fails after others succeeded.
        """
        keys = self.plan_remove(scope, identity_id)
        if not keys:
            logger.debug("Nothing to remove for %r in %s config", identity_id, scope.value)
            return []
        removed = self._remove(self.store(scope), keys)
        logger.info("Removed identity %r from %s config", identity_id, scope.value)
        return removed

    def plan_remove_all_active(self) -> list[str]:
        """Keys `remove_all_active` would delete."""
        store = self.store(Scope.LOCAL)
        return [
            entry.name
            for entry in store.entries(self._codec.namespace_pattern)
            if not self._is_protected(entry.name)
        ]

    def remove_all_active(self) -> list[str]:
        """Delete every unprotected namespace key of the local scope.

        Clears whatever identity is active, regardless of its id.

        Raises:
            NoLocalScopeError: If no local scope is configured.
            PartialWriteError: If a deletion fails after others succeeded.
        """
        keys = self.plan_remove_all_active()
        if not keys:
            return []
        removed = self._remove(self.store(Scope.LOCAL), keys)
        logger.info("Cleared active identity (%d keys)", len(removed))
        return removed

    def activate(self, identity_id: str) -> Identity:
        """Copy a global identity into the local scope as the active one.

        Fields of a previously active identity are not cleared first, so
        an optional field the new identity lacks keeps its old value.

        Raises:
            NoLocalScopeError: If no local scope is configured.
            NoSuchIdentityError: If the id is not in the global scope.
            PartialWriteError: If the local store rejects one of the writes.
        """
        local = self.store(Scope.LOCAL)
        identity = self.get(Scope.GLOBAL, identity_id)
        if identity is None:
            raise NoSuchIdentityError(identity_id)
        self._write(local, self._codec.encode_active(identity))
        logger.info("Activated identity %r", identity_id)
        return identity

    def select(self, selector: Selector) -> Identity | None:
        """Let the user choose a global identity and activate it.

        Returns None when there is nothing to choose from or nothing was chosen.
        """
        candidates = sorted(self.list(Scope.GLOBAL))
        if not candidates:
            return None
        choice = selector.choose(candidates)
        if choice is None:
            logger.debug("No identity selected")
            return None
        return self.activate(choice)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _write(self, store: ConfigStore, pairs: Sequence[Pair]) -> list[str]:
        written: list[str] = []
        for key, value in pairs:
            try:
                store.set_string(key, value)
            except StoreError as e:
                raise PartialWriteError(written, key) from e
            logger.debug("Set %s", key)
            written.append(key)
        return written

    def _remove(self, store: ConfigStore, keys: Sequence[str]) -> list[str]:
        removed: list[str] = []
        for key in keys:
            try:
                store.remove(key)
            except StoreError as e:
                raise PartialWriteError(removed, key) from e
            logger.debug("Removed %s", key)
            removed.append(key)
        return removed

    def _owned_by(self, key: str, identity_id: str, prefix: str) -> bool:
        """Whether a key matched by the `<namespace>.<id>.*` glob belongs to this id.

        Deviation from deleting every key under the prefix: keys that decode
        to a longer dotted id (work -> work.client.name) and undecodable keys
        with more than one segment after the prefix (user.work.client.x) are
        kept. Only keys decoding to exactly this id, or undecodable keys one
        segment past the prefix (user.work.extra), are owned.
        """
        decoded = self._codec.decode_id(key)
        if decoded is not None:
            return decoded[0] == identity_id
        return "." not in key[len(prefix):]

    def _is_protected(self, key: str) -> bool:
        return key.rsplit(".", 1)[-1].lower() in self._protected
