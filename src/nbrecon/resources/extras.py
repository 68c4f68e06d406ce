"""Extras resources: webhooks."""

from nbrecon.schemas.resource import Attribute, AttrType, Presence, ResourceSpec
from nbrecon.schemas.validators import OneOf

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

WEBHOOK = ResourceSpec(
    kind="webhook",
    endpoint="/extras/webhooks/",
    description="Outgoing webhook triggered by object changes",
    attributes=(
        Attribute(name="name", type=AttrType.STRING, nullable=True),
        Attribute(name="content_types", type=AttrType.STRING_SET, presence=Presence.REQUIRED),
        Attribute(
            name="http_method",
            type=AttrType.STRING,
            presence=Presence.REQUIRED,
            validator=OneOf(HTTP_METHODS, ignore_case=True),
        ),
        Attribute(name="http_content_type", type=AttrType.STRING, presence=Presence.REQUIRED),
        Attribute(name="payload_url", type=AttrType.STRING, presence=Presence.REQUIRED, nullable=True),
        Attribute(name="additional_headers", type=AttrType.STRING),
        Attribute(name="body_template", type=AttrType.STRING),
        Attribute(name="secret", type=AttrType.STRING),
        Attribute(name="ca_file_path", type=AttrType.STRING, default="", nullable=True),
        Attribute(name="conditions", type=AttrType.STRING, default="", nullable=True),
        Attribute(name="enabled", type=AttrType.BOOL, default=False),
        Attribute(name="ssl_verification", type=AttrType.BOOL, default=False),
        Attribute(
            name="type_create",
            type=AttrType.BOOL,
            default=False,
            nullable=True,
            description="Call this webhook when a matching object is created",
        ),
        Attribute(
            name="type_update",
            type=AttrType.BOOL,
            default=False,
            nullable=True,
            description="Call this webhook when a matching object is updated",
        ),
        Attribute(
            name="type_delete",
            type=AttrType.BOOL,
            default=False,
            nullable=True,
            description="Call this webhook when a matching object is deleted",
        ),
    ),
)
