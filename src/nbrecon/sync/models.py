"""Data models shared by the reconciler, lookup resolver and tag synchronizer."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nbrecon.core.exceptions import ValidationError
from nbrecon.schemas.resource import ResourceSpec, is_zero


class ReconcileState(str, Enum):
    """Lifecycle of one resource instance."""

    ABSENT = "absent"
    PRESENT = "present"


class LocalState(BaseModel):
    """Declared attributes of one resource instance plus its NetBox id.

    ``id`` is the decimal string of the remote id, empty when no remote
    record exists. ``explicit`` holds the attribute names the user set
    (declared defaults count as set); nullable attributes outside it are left
    out of write payloads so the server default applies.
    """

    model_config = ConfigDict(validate_assignment=True)

    kind: str
    id: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)
    explicit: set[str] = Field(default_factory=set)

    @field_validator("id")
    @classmethod
    def _decimal_id(cls, v: str) -> str:
        if v and not v.isdigit():
            raise ValueError(f"id must be a decimal string, got {v!r}")
        return v

    @classmethod
    def from_config(cls, spec: ResourceSpec, config: Mapping[str, Any], id: str = "") -> LocalState:
        """Build a validated state from declared configuration.

        Declared defaults fill unset attributes; computed attributes may not
        be configured.

        Raises:
            ValidationError: With every problem found.
        """
        values, errors = spec.check_values(config)
        for attr in spec.attributes:
            if attr.computed and attr.name in config:
                errors.append(f"{attr.name}: computed attribute cannot be configured")
        explicit = {name for name, value in config.items() if value is not None and name in values}
        for attr in spec.attributes:
            if attr.name in explicit or attr.computed:
                continue
            if attr.default is not None:
                values[attr.name] = attr.coerce(attr.default)[0]
                explicit.add(attr.name)
        errors.extend(spec.check_required(values))
        errors.extend(spec.check_scope(values))
        if errors:
            raise ValidationError(errors)
        for attr in spec.attributes:
            values.setdefault(attr.name, attr.zero_value)
        return cls(kind=spec.kind, id=id, attributes=values, explicit=explicit)

    @property
    def status(self) -> ReconcileState:
        return ReconcileState.PRESENT if self.id else ReconcileState.ABSENT

    @property
    def remote_id(self) -> int | None:
        return int(self.id) if self.id else None

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> None:
        """Set one attribute and mark it as explicitly configured."""
        self.attributes[name] = value
        self.explicit.add(name)

    def clear_id(self) -> None:
        self.id = ""

    def to_config(self, explicit_only: bool = False) -> dict[str, Any]:
        """Plain dict with sets rendered as sorted lists (for YAML/JSON output).

        Args:
            explicit_only: Keep only explicitly configured attributes, so a
                reload leaves unset nullable fields unset.
        """
        out: dict[str, Any] = {}
        for name, value in self.attributes.items():
            if explicit_only and name not in self.explicit:
                continue
            out[name] = sorted(value) if isinstance(value, (set, frozenset)) else value
        return out


class RemoteRecord(BaseModel):
    """One NetBox object: numeric id plus its JSON payload."""

    id: int
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> RemoteRecord:
        return cls(id=int(data["id"]), payload=dict(data))

    def lookup(self, path: tuple[str, ...]) -> Any:
        """Follow a dotted path into the payload; None when any step is absent."""
        current: Any = self.payload
        for key in path:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
            if current is None:
                return None
        return current


class ScopeReference(BaseModel):
    """Polymorphic parent reference: (scope_type, scope_id), set together."""

    model_config = ConfigDict(frozen=True)

    scope_type: str
    scope_id: int

    @classmethod
    def from_values(cls, scope_type: Any, scope_id: Any) -> ScopeReference | None:
        """Build from a possibly-empty pair.

        Returns:
            None when both sides are empty.

        Raises:
            ValidationError: When only one side is set.
        """
        if is_zero(scope_type) and is_zero(scope_id):
            return None
        if is_zero(scope_type) or is_zero(scope_id):
            raise ValidationError(["scope_type and scope_id must be set together"])
        return cls(scope_type=scope_type, scope_id=scope_id)


class TagRef(BaseModel):
    """Resolved reference to a NetBox tag."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    slug: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "slug": self.slug}


class FilterPredicate(BaseModel):
    """Candidate filters for a lookup, keyed by attribute name."""

    filters: dict[str, Any] = Field(default_factory=dict)

    def active(self) -> dict[str, Any]:
        """Filters carrying a non-zero value."""
        return {name: value for name, value in self.filters.items() if not is_zero(value)}
