"""
Tag/Set Synchronizer - full-replace reconciliation of named-reference sets.

Every create/update submits the complete desired tag set and NetBox replaces
the object's whole tag assignment; there is no add/remove diffing. A name
that cannot be resolved fails the operation before anything is written.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from nbrecon.core.exceptions import Ambiguous, TagResolutionError
from nbrecon.sync.models import TagRef
from nbrecon.tools.base import InventoryAPI

logger = logging.getLogger(__name__)

TAGS_ENDPOINT = "/extras/tags/"


def names_from_remote(items: Iterable[Any]) -> frozenset[str]:
    """Names of a remote reference list (``[{"name": ...}, ...]`` or plain strings)."""
    names: set[str] = set()
    for item in items or ():
        if isinstance(item, dict):
            if item.get("name"):
                names.add(item["name"])
        elif item:
            names.add(str(item))
    return frozenset(names)


def same_members(a: Iterable[str], b: Iterable[str]) -> bool:
    """Unordered set equality."""
    return set(a) == set(b)


class TagSynchronizer:
    """Resolve tag names against the NetBox tag catalogue."""

    def __init__(self, endpoint: str = TAGS_ENDPOINT) -> None:
        self.endpoint = endpoint

    def resolve(self, client: InventoryAPI, names: Iterable[str]) -> list[TagRef]:
        """
        Resolve every name to a TagRef.

        Args:
            client: NetBox API client
            names: Desired tag names

        Returns:
            TagRefs sorted by name

        Raises:
            TagResolutionError: Listing every name not found
            Ambiguous: When a name matches more than one tag
        """
        resolved: list[TagRef] = []
        missing: list[str] = []
        for name in sorted(set(names)):
            page = client.list(self.endpoint, {"name": name, "limit": 2})
            if page.count == 0 or not page.results:
                missing.append(name)
                continue
            if page.count > 1:
                raise Ambiguous(f"Tag name {name!r} matches {page.count} tags")
            tag = page.results[0]
            resolved.append(TagRef(id=tag["id"], name=tag.get("name", name), slug=tag.get("slug", "")))

        if missing:
            raise TagResolutionError(missing)
        return resolved

    def apply(self, client: InventoryAPI, names: Iterable[str]) -> list[dict[str, Any]]:
        """Full replacement tag payload for the desired set."""
        refs = self.resolve(client, names)
        logger.debug(f"Resolved tags: {[r.name for r in refs]}")
        return [ref.to_payload() for ref in refs]
