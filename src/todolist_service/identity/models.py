"""Caller identity data model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CallerIdentity:
    """Typed view of the claims presented with one request."""
    name: str = ""
    object_id: str | None = None
    scopes: frozenset[str] = field(default_factory=frozenset)
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def owner_id(self) -> str:
        """Owner identifier: the oid claim, else the display name."""
        if self.object_id is not None:
            return self.object_id
        return self.name

    @property
    def oid_only_owner_id(self) -> str | None:
        """Owner identifier taken from the oid claim alone."""
        return self.object_id
