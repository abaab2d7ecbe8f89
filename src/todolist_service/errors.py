"""
Error taxonomy for todolist-service.

Every failure is terminal for the request that raised it and maps
directly onto an HTTP status code.
"""

from __future__ import annotations

from typing import Any


class TodoListError(Exception):
    """Base class for request-terminating errors."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str = "", **details: Any):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class Forbidden(TodoListError):
    """Caller lacks the scope or role the operation needs."""

    status_code = 403
    code = "forbidden"


class Unauthorized(TodoListError):
    """Caller is unauthenticated, or authenticated but not the owner."""

    status_code = 401
    code = "unauthorized"


class NotFound(TodoListError):
    status_code = 404
    code = "not_found"


class InvalidRequest(TodoListError):
    """Request body is not a JSON object."""

    status_code = 400
    code = "invalid_request"


class UnknownPolicyError(KeyError):
    """Raised when an operation names a policy the registry does not hold."""
