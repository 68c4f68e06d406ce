"""IPAM resources: VLAN groups (managed) and prefixes (lookup only)."""

from nbrecon.schemas.resource import Attribute, AttrType, Presence, ResourceSpec
from nbrecon.schemas.validators import IntBetween, IsCIDR, OneOf

VLAN_ID_RANGE = IntBetween(1, 4094)

# Object types a VLAN group can be scoped to
VLAN_GROUP_SCOPE_TYPES = (
    "dcim.location",
    "dcim.rack",
    "dcim.region",
    "dcim.site",
    "dcim.sitegroup",
    "virtualization.cluster",
    "virtualization.clustergroup",
)

VLAN_GROUP = ResourceSpec(
    kind="vlan_group",
    endpoint="/ipam/vlan-groups/",
    description="VLAN group with an optional polymorphic scope",
    attributes=(
        Attribute(name="name", type=AttrType.STRING, presence=Presence.REQUIRED),
        Attribute(name="slug", type=AttrType.STRING, presence=Presence.REQUIRED),
        Attribute(name="description", type=AttrType.STRING, default=""),
        Attribute(name="tags", type=AttrType.TAGS, presence=Presence.REQUIRED),
        Attribute(name="min_vid", type=AttrType.INT, default=1, validator=VLAN_ID_RANGE),
        Attribute(name="max_vid", type=AttrType.INT, default=4094, validator=VLAN_ID_RANGE),
        Attribute(
            name="scope_type",
            type=AttrType.STRING,
            nullable=True,
            validator=OneOf(VLAN_GROUP_SCOPE_TYPES),
        ),
        Attribute(name="scope_id", type=AttrType.INT, nullable=True),
    ),
    scope=("scope_type", "scope_id"),
)

PREFIX_LOOKUP = ResourceSpec(
    kind="prefix",
    endpoint="/ipam/prefixes/",
    description="Look up a single prefix by CIDR or VLAN VID",
    attributes=(
        Attribute(name="cidr", type=AttrType.STRING, remote_name="prefix", validator=IsCIDR()),
        Attribute(
            name="vlan_vid",
            type=AttrType.INT,
            remote_name="vlan_vid",
            source="vlan.vid",
            validator=VLAN_ID_RANGE,
        ),
        Attribute(name="vrf_id", type=AttrType.INT, presence=Presence.COMPUTED, source="vrf.id"),
    ),
    at_least_one_of=(("cidr", "vlan_vid"),),
)
