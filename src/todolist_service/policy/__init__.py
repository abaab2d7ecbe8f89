"""Authorization policies for todolist-service."""

from .engine import PolicyRegistry, READ_POLICY, WRITE_POLICY
from .models import AuthorizationPolicy

__all__ = ["PolicyRegistry", "AuthorizationPolicy", "READ_POLICY", "WRITE_POLICY"]
