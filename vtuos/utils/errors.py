"""Exception hierarchy shared by models, repositories and services."""


class VaultError(Exception):
    """Base class for all VT-UOS errors."""


class NotFoundError(VaultError, LookupError):
    """A requested record does not exist."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ValidationError(VaultError, ValueError):
    """Model data failed validation."""


class InvalidOperationError(VaultError):
    """The requested operation violates a vault business rule."""
