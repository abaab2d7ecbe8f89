"""
Named authorization policy registry.

Holds the policies operations are gated on, loads and exports
them as YAML, and enforces them against a caller's claims.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from ..errors import Forbidden, UnknownPolicyError
from ..identity.models import CallerIdentity
from .models import AuthorizationPolicy

logger = logging.getLogger(__name__)

READ_POLICY = "ToDo.Read"
WRITE_POLICY = "ToDo.Write"


def default_policies() -> list[AuthorizationPolicy]:
    return [
        AuthorizationPolicy(
            name=READ_POLICY,
            scopes={"ToDo.Read"},
            roles={"Todo.Read.All"},
            description="Read to-do items",
        ),
        AuthorizationPolicy(
            name=WRITE_POLICY,
            scopes={"ToDo.Write"},
            roles={"Todo.Write.All"},
            description="Create, change and delete to-do items",
        ),
    ]


class PolicyRegistry:
    """Stores named policies and checks callers against them."""

    def __init__(self, policies: list[AuthorizationPolicy] | None = None):
        self.policies: dict[str, AuthorizationPolicy] = {}
        for policy in default_policies() if policies is None else policies:
            self.add_policy(policy)

    def add_policy(self, policy: AuthorizationPolicy) -> None:
        self.policies[policy.name] = policy

    def get(self, name: str) -> AuthorizationPolicy:
        try:
            return self.policies[name]
        except KeyError:
            raise UnknownPolicyError(name) from None

    def is_satisfied(self, identity: CallerIdentity, name: str) -> bool:
        return self.get(name).is_satisfied_by(identity)

    def require(self, identity: CallerIdentity, name: str) -> None:
        """Raise Forbidden unless ``identity`` satisfies policy ``name``."""
        if not self.is_satisfied(identity, name):
            logger.info("policy_denied policy=%s caller=%s", name, identity.owner_id)
            raise Forbidden(f"policy {name} not satisfied", policy=name)

    def load_yaml(self, yaml_str: str) -> list[AuthorizationPolicy]:
        """Load policies from a YAML string, replacing same-named ones."""
        data = yaml.safe_load(yaml_str) or {}
        entries = data.get("policies", [data] if "name" in data else [])
        policies = []
        for pdata in entries:
            policy = AuthorizationPolicy.from_dict(pdata)
            self.add_policy(policy)
            policies.append(policy)
        logger.info("policies_loaded count=%d", len(policies))
        return policies

    def load_file(self, path: str) -> list[AuthorizationPolicy]:
        with open(path) as f:
            return self.load_yaml(f.read())

    def export_yaml(self) -> str:
        data = {"policies": [p.to_dict() for p in self.policies.values()]}
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def policy_summary(self) -> dict[str, Any]:
        return {
            "total_policies": len(self.policies),
            "policies": [p.to_dict() for p in self.policies.values()],
        }
