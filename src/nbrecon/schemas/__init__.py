"""Resource descriptor schemas and attribute validators."""

from nbrecon.schemas.resource import (
    ZERO_VALUES,
    Attribute,
    AttrType,
    Presence,
    ResourceSpec,
    is_zero,
)
from nbrecon.schemas.validators import IntBetween, IsCIDR, OneOf, Validator

__all__ = [
    "ZERO_VALUES",
    "AttrType",
    "Attribute",
    "IntBetween",
    "IsCIDR",
    "OneOf",
    "Presence",
    "ResourceSpec",
    "Validator",
    "is_zero",
]
