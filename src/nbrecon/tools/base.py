"""Protocol for the remote inventory API consumed by the reconciler and resolver."""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class ListResult:
    """One page of a NetBox list endpoint."""

    count: int
    results: list[dict[str, Any]] = field(default_factory=list)


class InventoryAPI(Protocol):
    """Blocking CRUD + list access to one inventory service.

    Implementations raise ``RemoteNotFound`` for 404, ``RemoteRejected`` for
    other 4xx and ``RemoteUnavailable`` for transport errors and 5xx.
    """

    def list(self, endpoint: str, params: dict[str, Any] | None = None) -> ListResult:
        """List objects matching query params.

        Args:
            endpoint: Endpoint path (e.g. ``/ipam/prefixes/``)
            params: Filter and ``limit`` query params

        Returns:
            ListResult with total match count and the returned page
        """
        ...

    def create(self, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create an object and return the stored representation."""
        ...

    def get(self, endpoint: str, object_id: int) -> dict[str, Any]:
        """Fetch one object by id."""
        ...

    def update(self, endpoint: str, object_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """Replace an object by id and return the stored representation."""
        ...

    def delete(self, endpoint: str, object_id: int) -> None:
        """Delete one object by id."""
        ...
