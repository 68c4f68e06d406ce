"""Pytest configuration and shared fixtures."""

import copy
from collections import defaultdict
from typing import Any

import pytest

from nbrecon.core.exceptions import RemoteNotFound
from nbrecon.core.settings import EnvSettings
from nbrecon.tools.base import ListResult

TAGS = "/extras/tags/"
WEBHOOKS = "/extras/webhooks/"


class FakeNetBox:
    """In-memory InventoryAPI.

    Stores objects per endpoint, assigns ids sequentially, answers list
    queries by exact field match and records every call in ``calls``.
    Webhook ``http_method`` is stored uppercased and integer ``parent``
    references come back nested, the way NetBox does.
    """

    def __init__(self) -> None:
        self.objects: dict[str, dict[int, dict[str, Any]]] = defaultdict(dict)
        self.calls: list[tuple[str, str, Any]] = []
        self.next_id = 1

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------
    def seed(self, endpoint: str, obj: dict[str, Any]) -> dict[str, Any]:
        obj = copy.deepcopy(obj)
        if "id" not in obj:
            obj["id"] = self._new_id()
        self.objects[endpoint][obj["id"]] = obj
        return obj

    def add_tag(self, name: str, slug: str | None = None) -> dict[str, Any]:
        return self.seed(TAGS, {"name": name, "slug": slug or name})

    def writes(self) -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] in ("POST", "PUT", "DELETE")]

    def _new_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id

    @staticmethod
    def _field(obj: dict[str, Any], key: str) -> Any:
        if key in obj:
            value = obj[key]
            return value.get("id") if isinstance(value, dict) else value
        # vlan_vid -> obj["vlan"]["vid"]
        head, _, tail = key.partition("_")
        nested = obj.get(head)
        if isinstance(nested, dict):
            return nested.get(tail)
        return None

    def _store(self, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        obj = copy.deepcopy(data)
        if endpoint == WEBHOOKS and obj.get("http_method"):
            obj["http_method"] = obj["http_method"].upper()
        if isinstance(obj.get("parent"), int):
            obj["parent"] = {"id": obj["parent"]}
        return obj

    def _existing(self, endpoint: str, object_id: int) -> dict[str, Any]:
        try:
            return self.objects[endpoint][object_id]
        except KeyError:
            raise RemoteNotFound(
                f"NetBox 404 Not Found: GET {endpoint}{object_id}/",
                status_code=404,
                method="GET",
                path=f"{endpoint}{object_id}/",
            ) from None

    # ------------------------------------------------------------------
    # InventoryAPI
    # ------------------------------------------------------------------
    def list(self, endpoint: str, params: dict[str, Any] | None = None) -> ListResult:
        params = dict(params or {})
        self.calls.append(("LIST", endpoint, dict(params)))
        limit = params.pop("limit", None)
        params.pop("offset", None)
        matches = [
            copy.deepcopy(obj)
            for obj in self.objects[endpoint].values()
            if all(self._field(obj, k) == v for k, v in params.items())
        ]
        page = matches[:limit] if limit else matches
        return ListResult(count=len(matches), results=page)

    def create(self, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("POST", endpoint, copy.deepcopy(data)))
        obj = self._store(endpoint, data)
        obj["id"] = self._new_id()
        self.objects[endpoint][obj["id"]] = obj
        return copy.deepcopy(obj)

    def get(self, endpoint: str, object_id: int) -> dict[str, Any]:
        self.calls.append(("GET", endpoint, object_id))
        return copy.deepcopy(self._existing(endpoint, object_id))

    def update(self, endpoint: str, object_id: int, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("PUT", endpoint, copy.deepcopy(data)))
        # fields left out of the payload keep their stored value
        obj = {**self._existing(endpoint, object_id), **self._store(endpoint, data)}
        obj["id"] = object_id
        self.objects[endpoint][object_id] = obj
        return copy.deepcopy(obj)

    def delete(self, endpoint: str, object_id: int) -> None:
        self.calls.append(("DELETE", endpoint, object_id))
        self._existing(endpoint, object_id)
        del self.objects[endpoint][object_id]


@pytest.fixture
def fake_netbox() -> FakeNetBox:
    """Empty in-memory NetBox with a small tag catalogue."""
    netbox = FakeNetBox()
    netbox.add_tag("net")
    netbox.add_tag("core")
    netbox.add_tag("edge")
    return netbox


@pytest.fixture
def test_settings() -> EnvSettings:
    """Test settings with safe defaults."""
    return EnvSettings(
        _env_file=None,
        netbox_url="https://netbox.example.com",
        netbox_token="test-token-123",
    )
