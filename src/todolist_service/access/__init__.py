"""Claims-based access control for todolist-service."""

from .engine import AccessDecisionEngine
from .context import AccessDecision, Operation, Outcome

__all__ = ["AccessDecisionEngine", "AccessDecision", "Operation", "Outcome"]
