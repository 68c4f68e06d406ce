"""Exception hierarchy for nbrecon.

Every error raised by the library derives from :class:`NetBoxSyncError`, so a
caller can catch all of them with one ``except`` clause and still tell the
failure classes apart.
"""

from __future__ import annotations

from typing import Any


class NetBoxSyncError(Exception):
    """Base exception for all nbrecon errors."""


class ConfigError(NetBoxSyncError):
    """NetBox URL or token missing."""


class ValidationError(NetBoxSyncError):
    """Local pre-flight validation failed; nothing was sent to NetBox.

    Attributes:
        errors: Individual validation messages.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        joined = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Validation failed:\n{joined}")


class InvalidStateError(NetBoxSyncError):
    """Operation not allowed for the current local state (e.g. update without an id)."""


class NotFound(NetBoxSyncError):
    """A lookup matched no remote record."""


class TagResolutionError(NotFound):
    """One or more tag names do not exist in the remote tag catalogue."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Unknown tag(s): {', '.join(names)}")


class Ambiguous(NetBoxSyncError):
    """A lookup matched more than one remote record."""


class RemoteError(NetBoxSyncError):
    """A NetBox API call failed.

    Attributes:
        status_code: HTTP status, or None for transport failures.
        method: HTTP method of the failed call.
        path: API path of the failed call.
        detail: Parsed error body, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        method: str = "",
        path: str = "",
        detail: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.path = path
        self.detail = detail


class RemoteNotFound(RemoteError):
    """NetBox answered 404."""


class RemoteRejected(RemoteError):
    """NetBox answered with a non-404 4xx (bad request, conflict, forbidden)."""


class RemoteUnavailable(RemoteError):
    """Transport failure or 5xx from NetBox."""
