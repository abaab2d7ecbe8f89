"""
Authorization policy data models.

A named policy is satisfied when the caller holds any one of its
scopes or any one of its roles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..identity.models import CallerIdentity


@dataclass
class AuthorizationPolicy:
    """A named claims requirement."""
    name: str
    scopes: set[str] = field(default_factory=set)
    roles: set[str] = field(default_factory=set)
    description: str = ""

    def is_satisfied_by(self, identity: CallerIdentity) -> bool:
        if self.scopes & identity.scopes:
            return True
        return bool(self.roles & identity.roles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "scopes": sorted(self.scopes),
            "roles": sorted(self.roles),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthorizationPolicy:
        return cls(
            name=data["name"],
            scopes=set(data.get("scopes") or []),
            roles=set(data.get("roles") or []),
            description=data.get("description", ""),
        )
