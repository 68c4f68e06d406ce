"""
Unit tests for FieldMapper.
"""

import pytest

from nbrecon.core.exceptions import ValidationError
from nbrecon.resources import TENANT_GROUP, VLAN_GROUP, WEBHOOK
from nbrecon.sync.field_mapper import FieldMapper
from nbrecon.sync.models import LocalState, RemoteRecord


def vlan_group(**overrides) -> LocalState:
    config = {"name": "core", "slug": "core", "tags": ["net"]}
    config.update(overrides)
    return LocalState.from_config(VLAN_GROUP, config)


def webhook(**overrides) -> LocalState:
    config = {
        "content_types": ["dcim.device", "dcim.site"],
        "http_method": "POST",
        "http_content_type": "application/json",
        "payload_url": "https://hooks.example.com/netbox",
    }
    config.update(overrides)
    return LocalState.from_config(WEBHOOK, config)


class TestToRemote:
    """Test LocalState -> payload translation."""

    def test_defaults_are_sent(self):
        """Declared defaults count as configured and are sent."""
        payload = FieldMapper(VLAN_GROUP).to_remote(vlan_group())

        assert payload["name"] == "core"
        assert payload["slug"] == "core"
        assert payload["description"] == ""
        assert payload["min_vid"] == 1
        assert payload["max_vid"] == 4094

    def test_unset_nullable_scope_omitted(self):
        """An unconfigured scope pair is left out of the payload."""
        payload = FieldMapper(VLAN_GROUP).to_remote(vlan_group())

        assert "scope_type" not in payload
        assert "scope_id" not in payload

    def test_scope_sent_as_pair(self):
        """A set scope sends both halves."""
        payload = FieldMapper(VLAN_GROUP).to_remote(vlan_group(scope_type="dcim.site", scope_id=7))

        assert payload["scope_type"] == "dcim.site"
        assert payload["scope_id"] == 7

    def test_cleared_scope_sent_as_null(self):
        """Clearing a previously set scope sends explicit nulls for both."""
        state = vlan_group(scope_type="dcim.site", scope_id=7)
        state.set_attribute("scope_type", "")
        state.set_attribute("scope_id", 0)

        payload = FieldMapper(VLAN_GROUP).to_remote(state)

        assert payload["scope_type"] is None
        assert payload["scope_id"] is None

    def test_tags_taken_from_references(self):
        """Tags come from resolved references, never from raw names."""
        mapper = FieldMapper(VLAN_GROUP)
        refs = {"tags": [{"id": 1, "name": "net", "slug": "net"}]}

        assert mapper.to_remote(vlan_group(), refs)["tags"] == refs["tags"]
        assert "tags" not in mapper.to_remote(vlan_group())

    def test_nullable_zero_sent_as_null(self):
        """Configured nullable fields holding a zero value become null."""
        payload = FieldMapper(WEBHOOK).to_remote(webhook())

        assert payload["ca_file_path"] is None
        assert payload["conditions"] is None
        assert payload["type_create"] is None
        assert "name" not in payload

    def test_non_nullable_zero_sent(self):
        """Non-nullable fields are always sent, zero or not."""
        payload = FieldMapper(WEBHOOK).to_remote(webhook())

        assert payload["enabled"] is False
        assert payload["secret"] == ""

    def test_string_set_sorted(self):
        """String sets go on the wire as sorted lists."""
        state = webhook(content_types=["dcim.site", "dcim.device"])
        payload = FieldMapper(WEBHOOK).to_remote(state)

        assert payload["content_types"] == ["dcim.device", "dcim.site"]

    def test_remote_name_used(self):
        """remote_name renames the wire field."""
        state = LocalState.from_config(TENANT_GROUP, {"name": "a", "slug": "a", "parent_id": 5})

        payload = FieldMapper(TENANT_GROUP).to_remote(state)

        assert payload["parent"] == 5
        assert "parent_id" not in payload

    def test_invalid_state_rejected(self):
        """Out-of-range values fail before a payload is built."""
        state = vlan_group()
        state.set_attribute("min_vid", 5000)

        with pytest.raises(ValidationError) as exc:
            FieldMapper(VLAN_GROUP).to_remote(state)

        assert any("min_vid" in e for e in exc.value.errors)

    def test_kind_mismatch_rejected(self):
        """A state of another kind cannot be mapped."""
        with pytest.raises(ValidationError, match="does not match"):
            FieldMapper(VLAN_GROUP).validate(webhook())


class TestFromRemote:
    """Test RemoteRecord -> LocalState projection."""

    def test_missing_fields_become_zero(self):
        """Fields absent from the record take the type's zero value."""
        record = RemoteRecord.from_payload({"id": 9, "name": "core", "slug": "core"})

        state = FieldMapper(VLAN_GROUP).from_remote(record)

        assert state.id == "9"
        assert state.get("description") == ""
        assert state.get("min_vid") == 0
        assert state.get("tags") == frozenset()
        assert set(state.attributes) == set(VLAN_GROUP.names)

    def test_null_becomes_zero(self):
        """Explicit null reads back as zero."""
        record = RemoteRecord.from_payload({"id": 1, "name": None, "enabled": None})

        state = FieldMapper(WEBHOOK).from_remote(record)

        assert state.get("name") == ""
        assert state.get("enabled") is False

    def test_tags_become_name_set(self):
        """Nested tag objects read back as a set of names."""
        record = RemoteRecord.from_payload(
            {"id": 1, "tags": [{"id": 2, "name": "net"}, {"id": 3, "name": "core"}]}
        )

        state = FieldMapper(VLAN_GROUP).from_remote(record)

        assert state.get("tags") == frozenset({"net", "core"})

    def test_nested_source(self):
        """source paths follow nested objects."""
        record = RemoteRecord.from_payload({"id": 3, "name": "a", "parent": {"id": 5, "name": "p"}})

        state = FieldMapper(TENANT_GROUP).from_remote(record)

        assert state.get("parent_id") == 5

    def test_choice_dict_unwrapped(self):
        """Choice fields ({"value", "label"}) read back as their value."""
        record = RemoteRecord.from_payload({"id": 1, "http_method": {"value": "POST", "label": "POST"}})

        state = FieldMapper(WEBHOOK).from_remote(record)

        assert state.get("http_method") == "POST"

    def test_half_scope_normalized(self):
        """A scope with only one side present reads back as fully empty."""
        record = RemoteRecord.from_payload({"id": 1, "scope_type": "dcim.site", "scope_id": None})

        state = FieldMapper(VLAN_GROUP).from_remote(record)

        assert state.get("scope_type") == ""
        assert state.get("scope_id") == 0

    def test_full_scope_kept(self):
        """A complete scope pair is kept."""
        record = RemoteRecord.from_payload({"id": 1, "scope_type": "dcim.site", "scope_id": 4})

        state = FieldMapper(VLAN_GROUP).from_remote(record)

        assert (state.get("scope_type"), state.get("scope_id")) == ("dcim.site", 4)
