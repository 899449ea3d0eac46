class RegistryError(Exception):
    """Base exception for document registry errors."""


class DocumentNotFoundError(RegistryError):
    """Raised when no entry matches the requested id."""


class InvalidTransitionError(RegistryError):
    """Raised when a status change is not allowed by the entry lifecycle."""
