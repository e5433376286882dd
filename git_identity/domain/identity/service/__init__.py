from .registry import IdentityRegistry

__all__ = ["IdentityRegistry"]
