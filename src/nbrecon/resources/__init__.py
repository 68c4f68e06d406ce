"""
Resource catalogue.

Managed resources go through ResourceReconciler; lookups go through
LookupResolver. A kind may appear in both (e.g. tenant_group).
"""

from nbrecon.resources.extras import WEBHOOK
from nbrecon.resources.ipam import PREFIX_LOOKUP, VLAN_GROUP
from nbrecon.resources.tenancy import TENANT_GROUP, TENANT_GROUP_LOOKUP, TENANT_LOOKUP
from nbrecon.schemas.resource import ResourceSpec

RESOURCES: dict[str, ResourceSpec] = {
    spec.kind: spec for spec in (VLAN_GROUP, WEBHOOK, TENANT_GROUP)
}

LOOKUPS: dict[str, ResourceSpec] = {
    spec.kind: spec for spec in (PREFIX_LOOKUP, TENANT_LOOKUP, TENANT_GROUP_LOOKUP)
}


def get_resource(kind: str) -> ResourceSpec:
    """Managed resource spec by kind.

    Raises:
        KeyError: Unknown kind
    """
    try:
        return RESOURCES[kind]
    except KeyError:
        raise KeyError(f"Unknown resource {kind!r}; expected one of {sorted(RESOURCES)}") from None


def get_lookup(kind: str) -> ResourceSpec:
    """Lookup spec by kind.

    Raises:
        KeyError: Unknown kind
    """
    try:
        return LOOKUPS[kind]
    except KeyError:
        raise KeyError(f"Unknown lookup {kind!r}; expected one of {sorted(LOOKUPS)}") from None


__all__ = [
    "LOOKUPS",
    "PREFIX_LOOKUP",
    "RESOURCES",
    "TENANT_GROUP",
    "TENANT_GROUP_LOOKUP",
    "TENANT_LOOKUP",
    "VLAN_GROUP",
    "WEBHOOK",
    "get_lookup",
    "get_resource",
]
