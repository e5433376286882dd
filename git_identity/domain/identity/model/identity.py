"""Identity value objects."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """A named git identity.

    Only `id` must be set for an identity to exist; a record read from a
    store may lack name or email. Whether such a record is usable is up to
    the registry (see `complete`).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    email: str = ""
    signing_key: str | None = None
    ssh_key: Path | None = None

    @property
    def complete(self) -> bool:
        return bool(self.name and self.email)

    def __str__(self) -> str:
        return f"{self.id}: {self.name} <{self.email}>"


class ActiveIdentity(BaseModel):
    """The identity materialized without an id in a store."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    signing_key: str | None = None
    ssh_key: Path | None = None
    id: str | None = None  # matching global identity, when exactly one matches

    def matches(self, identity: Identity) -> bool:
        return (
            self.name == identity.name
            and self.email == identity.email
            and self.signing_key == identity.signing_key
            and self.ssh_key == identity.ssh_key
        )
