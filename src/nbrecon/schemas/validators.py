"""Attribute validators.

A validator is called with the attribute name and a non-zero value and
returns an error message, or None when the value is acceptable.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Any, Protocol


class Validator(Protocol):
    """Callable validator contract."""

    def __call__(self, name: str, value: Any) -> str | None: ...


@dataclass(frozen=True)
class IsCIDR:
    """Value must be an IP network in ``address/prefixlen`` form."""

    def __call__(self, name: str, value: Any) -> str | None:
        if not isinstance(value, str) or "/" not in value:
            return f"{name}: expected CIDR notation (e.g. 10.0.0.0/24), got {value!r}"
        try:
            ipaddress.ip_network(value, strict=False)
        except ValueError:
            return f"{name}: {value!r} is not a valid CIDR"
        return None


@dataclass(frozen=True)
class IntBetween:
    """Inclusive integer range."""

    minimum: int
    maximum: int

    def __call__(self, name: str, value: Any) -> str | None:
        if not self.minimum <= value <= self.maximum:
            return f"{name}: expected to be in the range ({self.minimum} - {self.maximum}), got {value}"
        return None


@dataclass(frozen=True)
class OneOf:
    """Value must be one of ``choices``."""

    choices: tuple[str, ...]
    ignore_case: bool = False

    def __call__(self, name: str, value: Any) -> str | None:
        if self.ignore_case:
            allowed = {c.lower() for c in self.choices}
            ok = str(value).lower() in allowed
        else:
            ok = value in self.choices
        if not ok:
            return f"{name}: expected one of {list(self.choices)}, got {value!r}"
        return None
