"""Error types raised by the admin tooling."""
from __future__ import annotations


class AdminToolError(RuntimeError):
    """Base class for failures surfaced to the command-line scripts."""


class ConfigurationError(AdminToolError):
    """Raised when credentials or settings are missing or unusable."""


class LookupNotFoundError(AdminToolError):
    """Raised when no identity record matches the requested email."""

    def __init__(self, email: str) -> None:
        super().__init__(f"No Firebase user found for {email}")
        self.email = email


class TransportError(AdminToolError):
    """Raised when a call to Firebase Authentication fails outright."""


class RecordError(AdminToolError):
    """Raised when reading or writing a single user document fails."""

    def __init__(self, message: str, *, uid: str | None = None) -> None:
        super().__init__(message)
        self.uid = uid


__all__ = [
    "AdminToolError",
    "ConfigurationError",
    "LookupNotFoundError",
    "TransportError",
    "RecordError",
]
