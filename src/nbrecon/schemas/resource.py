"""
Resource descriptors - static, per-resource-type attribute tables.

A ResourceSpec says which attributes a resource has, how each one is typed,
whether it is required, optional or computed, what its default is, how it is
named on the wire and where it is read back from. Resource-specific behaviour
lives here as data; the Field Mapper, Reconciler and Lookup Resolver are
generic over it.

Example:
```python
VLAN_GROUP = ResourceSpec(
    kind="vlan_group",
    endpoint="/ipam/vlan-groups/",
    attributes=(
        Attribute(name="name", type=AttrType.STRING, presence=Presence.REQUIRED),
        Attribute(name="min_vid", type=AttrType.INT, default=1, validator=IntBetween(1, 4094)),
        Attribute(name="tags", type=AttrType.TAGS, presence=Presence.REQUIRED),
    ),
)
```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AttrType(str, Enum):
    """Semantic attribute types."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    STRING_SET = "set"
    TAGS = "tags"


class Presence(str, Enum):
    """Who supplies the attribute value."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    COMPUTED = "computed"


ZERO_VALUES: dict[AttrType, Any] = {
    AttrType.STRING: "",
    AttrType.INT: 0,
    AttrType.BOOL: False,
    AttrType.STRING_SET: frozenset(),
    AttrType.TAGS: frozenset(),
}

SET_TYPES = (AttrType.STRING_SET, AttrType.TAGS)


def is_zero(value: Any) -> bool:
    """True for None and for every type's zero value."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (str, int)):
        return value in ("", 0)
    if isinstance(value, (set, frozenset, list, tuple)):
        return len(value) == 0
    return False


class Attribute(BaseModel):
    """One entry of a resource's attribute table."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: AttrType
    presence: Presence = Presence.OPTIONAL
    default: Any = None
    remote_name: str | None = Field(
        default=None,
        description="Wire name used in request payloads and query params (default: name)",
    )
    source: str | None = Field(
        default=None,
        description="Dotted path read from the remote record (default: remote_name)",
    )
    nullable: bool = Field(
        default=False,
        description="Remote field is optional: a local zero value is sent as explicit null",
    )
    validator: Callable[[str, Any], str | None] | None = None
    description: str = ""

    @property
    def wire_name(self) -> str:
        return self.remote_name or self.name

    @property
    def read_path(self) -> tuple[str, ...]:
        return tuple((self.source or self.wire_name).split("."))

    @property
    def zero_value(self) -> Any:
        return ZERO_VALUES[self.type]

    @property
    def computed(self) -> bool:
        return self.presence is Presence.COMPUTED

    @property
    def required(self) -> bool:
        return self.presence is Presence.REQUIRED

    def coerce(self, value: Any) -> tuple[Any, str | None]:
        """Type-check ``value`` and convert set-like input to a frozenset.

        Returns:
            Tuple of (converted value, error message or None).
        """
        if value is None:
            return self.zero_value, None
        if self.type is AttrType.STRING:
            if isinstance(value, str):
                return value, None
        elif self.type is AttrType.INT:
            if isinstance(value, int) and not isinstance(value, bool):
                return value, None
        elif self.type is AttrType.BOOL:
            if isinstance(value, bool):
                return value, None
        elif isinstance(value, (list, tuple, set, frozenset)):
            if all(isinstance(v, str) for v in value):
                return frozenset(value), None
        return value, f"{self.name}: expected {self.type.value}, got {type(value).__name__}"

    def check(self, value: Any) -> tuple[Any, list[str]]:
        """Coerce then run the validator on non-zero values."""
        converted, error = self.coerce(value)
        if error:
            return converted, [error]
        if self.validator is not None and not is_zero(converted):
            message = self.validator(self.name, converted)
            if message:
                return converted, [message]
        return converted, []


class ResourceSpec(BaseModel):
    """Immutable descriptor for one resource type."""

    model_config = ConfigDict(frozen=True)

    kind: str
    endpoint: str
    attributes: tuple[Attribute, ...]
    at_least_one_of: tuple[tuple[str, ...], ...] = ()
    scope: tuple[str, str] | None = Field(
        default=None,
        description="(type attribute, id attribute) pair set atomically",
    )
    description: str = ""

    @model_validator(mode="after")
    def _check_table(self) -> ResourceSpec:
        names = [a.name for a in self.attributes]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"{self.kind}: duplicate attributes {duplicates}")
        referenced = [n for group in self.at_least_one_of for n in group]
        if self.scope:
            referenced.extend(self.scope)
        unknown = sorted(set(referenced) - set(names))
        if unknown:
            raise ValueError(f"{self.kind}: unknown attributes referenced {unknown}")
        return self

    def attribute(self, name: str) -> Attribute:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise KeyError(f"{self.kind} has no attribute {name!r}")

    @property
    def names(self) -> list[str]:
        return [a.name for a in self.attributes]

    @property
    def writable(self) -> list[Attribute]:
        return [a for a in self.attributes if not a.computed]

    def check_values(self, values: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
        """Type-check and validate a partial attribute mapping.

        Unknown names are reported; missing names are not.

        Returns:
            Tuple of (converted values, error messages).
        """
        converted: dict[str, Any] = {}
        errors: list[str] = []
        known = set(self.names)
        for name, value in values.items():
            if name not in known:
                errors.append(f"{name}: unknown attribute for {self.kind}")
                continue
            converted[name], attr_errors = self.attribute(name).check(value)
            errors.extend(attr_errors)
        return converted, errors

    def check_required(self, values: Mapping[str, Any]) -> list[str]:
        return [
            f"{attr.name}: required attribute is missing"
            for attr in self.attributes
            if attr.required and values.get(attr.name) is None
        ]

    def check_scope(self, values: Mapping[str, Any]) -> list[str]:
        if not self.scope:
            return []
        type_name, id_name = self.scope
        has_type = not is_zero(values.get(type_name))
        has_id = not is_zero(values.get(id_name))
        if has_type != has_id:
            return [f"{type_name} and {id_name} must be set together"]
        return []

    def check_at_least_one_of(self, values: Mapping[str, Any]) -> list[str]:
        return [
            f"one of {list(group)} must be specified"
            for group in self.at_least_one_of
            if all(is_zero(values.get(name)) for name in group)
        ]
