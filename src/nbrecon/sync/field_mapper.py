"""
Field Mapper - translate between LocalState and NetBox payloads.

Both directions are driven by the ResourceSpec attribute table:

- to_remote: validated local values -> request payload. A nullable wire field
  holding a zero value is sent as explicit ``null``; one the user never set is
  omitted so the NetBox default applies.
- from_remote: RemoteRecord -> fully populated LocalState. Anything the server
  omitted (or returned as ``null``) becomes the type's zero value.

The mapper holds no state between calls and never talks to NetBox; tag
references are resolved beforehand by the TagSynchronizer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from nbrecon.core.exceptions import ValidationError
from nbrecon.schemas.resource import AttrType, Attribute, ResourceSpec, is_zero
from nbrecon.sync.models import LocalState, RemoteRecord, ScopeReference
from nbrecon.sync.tags import names_from_remote


class FieldMapper:
    """Descriptor-driven, bidirectional field translation for one resource type."""

    def __init__(self, spec: ResourceSpec) -> None:
        self.spec = spec

    def validate(self, state: LocalState) -> None:
        """Pre-flight check of every configurable attribute.

        Raises:
            ValidationError: With every problem found.
        """
        configurable = {a.name: state.get(a.name) for a in self.spec.writable}
        _, errors = self.spec.check_values(configurable)
        errors.extend(self.spec.check_required(configurable))
        errors.extend(self.spec.check_scope(configurable))
        if state.kind != self.spec.kind:
            errors.append(f"state kind {state.kind!r} does not match {self.spec.kind!r}")
        if errors:
            raise ValidationError(errors)

    def to_remote(
        self,
        state: LocalState,
        references: Mapping[str, list[dict[str, Any]]] | None = None,
    ) -> dict[str, Any]:
        """Build a create/update payload from local state.

        Args:
            state: Local state to translate
            references: Resolved tag payloads keyed by attribute name

        Returns:
            JSON-ready payload

        Raises:
            ValidationError: Before any payload is produced
        """
        self.validate(state)
        references = references or {}
        payload: dict[str, Any] = {}

        for attr in self.spec.writable:
            if attr.type is AttrType.TAGS:
                if attr.name in references:
                    payload[attr.wire_name] = references[attr.name]
                continue

            value = state.get(attr.name, attr.zero_value)
            if attr.nullable:
                if attr.name not in state.explicit:
                    continue
                payload[attr.wire_name] = None if is_zero(value) else self._wire_value(attr, value)
            else:
                payload[attr.wire_name] = self._wire_value(attr, value)

        if self.spec.scope:
            self._scope_to_remote(state, payload)
        return payload

    def _scope_to_remote(self, state: LocalState, payload: dict[str, Any]) -> None:
        type_name, id_name = self.spec.scope
        scope = ScopeReference.from_values(state.get(type_name), state.get(id_name))
        type_attr = self.spec.attribute(type_name)
        id_attr = self.spec.attribute(id_name)
        if scope is not None:
            payload[type_attr.wire_name] = scope.scope_type
            payload[id_attr.wire_name] = scope.scope_id
        elif type_name in state.explicit or id_name in state.explicit:
            payload[type_attr.wire_name] = None
            payload[id_attr.wire_name] = None
        else:
            payload.pop(type_attr.wire_name, None)
            payload.pop(id_attr.wire_name, None)

    @staticmethod
    def _wire_value(attr: Attribute, value: Any) -> Any:
        if attr.type is AttrType.STRING_SET:
            return sorted(value)
        return value

    def from_remote(self, record: RemoteRecord) -> LocalState:
        """Project a remote record onto a fully populated LocalState."""
        attributes: dict[str, Any] = {}
        for attr in self.spec.attributes:
            attributes[attr.name] = self._local_value(attr, record.lookup(attr.read_path))

        if self.spec.scope:
            type_name, id_name = self.spec.scope
            if is_zero(attributes[type_name]) or is_zero(attributes[id_name]):
                attributes[type_name] = self.spec.attribute(type_name).zero_value
                attributes[id_name] = self.spec.attribute(id_name).zero_value

        return LocalState(kind=self.spec.kind, id=str(record.id), attributes=attributes)

    @staticmethod
    def _local_value(attr: Attribute, raw: Any) -> Any:
        if isinstance(raw, Mapping) and "value" in raw:
            # choice fields come back as {"value": ..., "label": ...}
            raw = raw["value"]
        if raw is None:
            return attr.zero_value
        if attr.type is AttrType.TAGS:
            return names_from_remote(raw)
        if attr.type is AttrType.STRING_SET:
            return frozenset(str(v) for v in _as_iterable(raw))
        if attr.type is AttrType.INT:
            return int(raw)
        if attr.type is AttrType.BOOL:
            return bool(raw)
        return str(raw)


def _as_iterable(raw: Any) -> Iterable[Any]:
    if isinstance(raw, (list, tuple, set, frozenset)):
        return raw
    return [raw]
