"""Identity domain models."""

from .field import IdentityField, Scope
from .identity import ActiveIdentity, Identity

__all__ = [
    "ActiveIdentity",
    "Identity",
    "IdentityField",
    "Scope",
]
