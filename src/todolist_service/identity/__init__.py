"""Caller identity for todolist-service."""

from .models import CallerIdentity
from .claims import authenticate, identity_from_claims, issue_token

__all__ = ["CallerIdentity", "authenticate", "identity_from_claims", "issue_token"]
