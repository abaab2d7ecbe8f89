"""
Access decision records.

Names the operations the engine gates and the outcomes it can reach,
and captures one decision per evaluated request.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..identity.models import CallerIdentity


class Operation(str, Enum):
    LIST = "list"
    READ_ONE = "read_one"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Outcome(str, Enum):
    OK = "ok"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"


@dataclass
class AccessDecision:
    operation: Operation
    outcome: Outcome
    caller: CallerIdentity
    todo_id: int | None = None
    reason: str = ""
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation.value,
            "outcome": self.outcome.value,
            "caller": self.caller.owner_id,
            "todo_id": self.todo_id,
            "reason": self.reason,
            "timestamp": self.timestamp,
        }
