"""
NetBox Reconciliation Module.

This module provides:
- FieldMapper: LocalState <-> NetBox payload translation
- ResourceReconciler: Create/Read/Update/Delete with drift handling
- LookupResolver: Filter -> exactly one NetBox object
- TagSynchronizer: Full-replace tag set resolution

Usage:
    from nbrecon.resources import VLAN_GROUP
    from nbrecon.sync import LocalState, ResourceReconciler
    from nbrecon.tools.netbox_tool import NetBoxAPITool

    client = NetBoxAPITool()
    state = LocalState.from_config(VLAN_GROUP, {"name": "core", "slug": "core", "tags": ["net"]})
    ResourceReconciler(VLAN_GROUP).create(client, state)
"""

from nbrecon.sync.field_mapper import FieldMapper
from nbrecon.sync.lookup import PAGE_LIMIT, LookupResolver
from nbrecon.sync.models import (
    FilterPredicate,
    LocalState,
    ReconcileState,
    RemoteRecord,
    ScopeReference,
    TagRef,
)
from nbrecon.sync.reconciler import ResourceReconciler
from nbrecon.sync.tags import TagSynchronizer, names_from_remote, same_members

__all__ = [
    "PAGE_LIMIT",
    "FieldMapper",
    "FilterPredicate",
    "LocalState",
    "LookupResolver",
    "ReconcileState",
    "RemoteRecord",
    "ResourceReconciler",
    "ScopeReference",
    "TagRef",
    "TagSynchronizer",
    "names_from_remote",
    "same_members",
]
