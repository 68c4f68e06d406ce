"""Tenancy resources: tenant groups (managed and lookup) and tenants (lookup)."""

from nbrecon.schemas.resource import Attribute, AttrType, Presence, ResourceSpec

TENANT_GROUP = ResourceSpec(
    kind="tenant_group",
    endpoint="/tenancy/tenant-groups/",
    description="Tenant group, optionally nested under a parent group",
    attributes=(
        Attribute(name="name", type=AttrType.STRING, presence=Presence.REQUIRED),
        Attribute(name="slug", type=AttrType.STRING, presence=Presence.REQUIRED),
        Attribute(name="description", type=AttrType.STRING, default=""),
        Attribute(
            name="parent_id",
            type=AttrType.INT,
            remote_name="parent",
            source="parent.id",
            nullable=True,
        ),
        Attribute(name="tags", type=AttrType.TAGS),
    ),
)

TENANT_GROUP_LOOKUP = ResourceSpec(
    kind="tenant_group",
    endpoint="/tenancy/tenant-groups/",
    description="Look up a single tenant group by name or slug",
    attributes=(
        Attribute(name="name", type=AttrType.STRING),
        Attribute(name="slug", type=AttrType.STRING),
        Attribute(name="description", type=AttrType.STRING, presence=Presence.COMPUTED),
        Attribute(name="parent_id", type=AttrType.INT, presence=Presence.COMPUTED, source="parent.id"),
    ),
    at_least_one_of=(("name", "slug"),),
)

TENANT_LOOKUP = ResourceSpec(
    kind="tenant",
    endpoint="/tenancy/tenants/",
    description="Look up a single tenant by name or slug",
    attributes=(
        Attribute(name="name", type=AttrType.STRING),
        Attribute(name="slug", type=AttrType.STRING),
        Attribute(name="description", type=AttrType.STRING, presence=Presence.COMPUTED),
        Attribute(name="group_id", type=AttrType.INT, presence=Presence.COMPUTED, source="group.id"),
    ),
    at_least_one_of=(("name", "slug"),),
)
