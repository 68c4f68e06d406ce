"""
Lookup Resolver - resolve a filter predicate to exactly one NetBox object.

The listing call asks for at most two records: enough to tell "one match"
from "more than one" without pulling a large result set. Zero matches raise
NotFound, two or more raise Ambiguous. The resolver never picks a result.
"""

from __future__ import annotations

import logging
from typing import Any

from nbrecon.core.exceptions import Ambiguous, NotFound, ValidationError
from nbrecon.schemas.resource import ResourceSpec
from nbrecon.sync.field_mapper import FieldMapper
from nbrecon.sync.models import FilterPredicate, LocalState, RemoteRecord
from nbrecon.tools.base import InventoryAPI

logger = logging.getLogger(__name__)

# Two results are enough to detect ambiguity
PAGE_LIMIT = 2


class LookupResolver:
    """Read-only lookup for one resource type."""

    def __init__(self, spec: ResourceSpec, mapper: FieldMapper | None = None) -> None:
        self.spec = spec
        self.mapper = mapper or FieldMapper(spec)

    def query_params(self, predicate: FilterPredicate) -> dict[str, Any]:
        """
        Validate filters and build list query params.

        Raises:
            ValidationError: Unknown or computed filter, bad value, or no
                usable filter at all
        """
        values, errors = self.spec.check_values(predicate.filters)
        for name in values:
            if self.spec.attribute(name).computed:
                errors.append(f"{name}: computed attribute cannot be used as a filter")
        errors.extend(self.spec.check_at_least_one_of(values))

        active = FilterPredicate(filters=values).active()
        if not active and not errors:
            errors.append(f"at least one filter is required for {self.spec.kind}")
        if errors:
            raise ValidationError(errors)

        params: dict[str, Any] = {}
        for name, value in active.items():
            wire = self.spec.attribute(name).wire_name
            params[wire] = sorted(value) if isinstance(value, frozenset) else value
        params["limit"] = PAGE_LIMIT
        return params

    def resolve(self, client: InventoryAPI, predicate: FilterPredicate) -> RemoteRecord:
        """
        Return the single record matching ``predicate``.

        Raises:
            ValidationError: Filters invalid (nothing sent)
            NotFound: No match
            Ambiguous: More than one match
        """
        params = self.query_params(predicate)
        page = client.list(self.spec.endpoint, params)
        count = page.count if page.count is not None else len(page.results)

        if count > 1:
            raise Ambiguous(f"More than one result ({count}) for {self.spec.kind}. Specify a more narrow filter")
        if count == 0 or not page.results:
            raise NotFound(f"No result for {self.spec.kind} matching {predicate.active()}")

        record = RemoteRecord.from_payload(page.results[0])
        logger.debug(f"Resolved {self.spec.kind} id={record.id}")
        return record

    def read(self, client: InventoryAPI, predicate: FilterPredicate) -> LocalState:
        """Resolve and project the match onto a LocalState; filters are echoed back as configured."""
        record = self.resolve(client, predicate)
        state = self.mapper.from_remote(record)
        values, _ = self.spec.check_values(predicate.filters)
        for name, value in FilterPredicate(filters=values).active().items():
            state.set_attribute(name, value)
        return state
