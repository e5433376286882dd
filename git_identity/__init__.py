"""git-identity - manage multiple git identities and switch between them."""

__version__ = "0.3.0"
