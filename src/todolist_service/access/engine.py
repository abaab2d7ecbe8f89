"""
Claims-based access decision engine.

Evaluates a caller's scopes, roles and ownership against each to-do
operation and carries out the ones it allows against the injected store.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, NoReturn

from ..errors import Forbidden, NotFound, TodoListError, Unauthorized
from ..identity.models import CallerIdentity
from ..policy.engine import PolicyRegistry, READ_POLICY, WRITE_POLICY
from ..todos.models import Todo
from ..todos.store import TodoStore
from .context import AccessDecision, Operation, Outcome

logger = logging.getLogger(__name__)

READ_SCOPE = "ToDo.Read"
READ_ALL_ROLE = "Todo.Read.All"

_OUTCOMES = {
    Forbidden: Outcome.FORBIDDEN,
    Unauthorized: Outcome.UNAUTHORIZED,
    NotFound: Outcome.NOT_FOUND,
}


class AccessDecisionEngine:
    """
    Gatekeeper for to-do operations.

    Scope checks for List and ReadOne are made directly against the
    caller's claims; Create, Update and Delete are gated on named policies
    from the registry. With ``strict_ownership`` off, each operation keeps
    its historical owner rule: Delete compares the oid claim only and
    Update replaces the item without checking who owns it.
    """

    def __init__(
        self,
        store: TodoStore | None = None,
        policies: PolicyRegistry | None = None,
        strict_ownership: bool = False,
        decision_log_size: int = 1000,
    ):
        self.store = store if store is not None else TodoStore()
        self.policies = policies if policies is not None else PolicyRegistry()
        self.strict_ownership = strict_ownership
        self.decision_log: deque[AccessDecision] = deque(maxlen=decision_log_size)

    # --- Operations ---

    def list_todos(self, identity: CallerIdentity) -> list[Todo]:
        if identity.has_scope(READ_SCOPE):
            owner = identity.owner_id
            todos = self.store.list(lambda t: t.owner == owner)
            self._record(Operation.LIST, identity, reason=f"owned by {owner}")
            return todos
        if identity.has_role(READ_ALL_ROLE):
            todos = self.store.list()
            self._record(Operation.LIST, identity, reason="application permission")
            return todos
        self._fail(Operation.LIST, identity, Forbidden(f"requires scope {READ_SCOPE} or role {READ_ALL_ROLE}"))

    def get_todo(self, identity: CallerIdentity, todo_id: int) -> Todo | None:
        """Return the caller's item ``todo_id``, or None if they own no such item."""
        if not identity.has_scope(READ_SCOPE):
            self._fail(Operation.READ_ONE, identity, Forbidden(f"requires scope {READ_SCOPE}"), todo_id)

        owner = identity.owner_id
        todo = self.store.get(todo_id)
        if todo is None or todo.owner != owner:
            self._record(Operation.READ_ONE, identity, todo_id=todo_id, reason="no owned match")
            return None
        self._record(Operation.READ_ONE, identity, todo_id=todo_id)
        return todo

    def create_todo(self, identity: CallerIdentity, title: str) -> Todo:
        self._require_policy(Operation.CREATE, identity, WRITE_POLICY)

        todo = self.store.add(identity.owner_id, title)
        self._record(Operation.CREATE, identity, todo_id=todo.id)
        logger.info("todo_created id=%d owner=%s", todo.id, todo.owner)
        return todo

    def update_todo(self, identity: CallerIdentity, todo_id: int, todo: Todo) -> Todo:
        # Historically gated on the read policy, not the write policy.
        self._require_policy(Operation.UPDATE, identity, READ_POLICY, todo_id)

        if todo_id != todo.id:
            self._fail(
                Operation.UPDATE, identity,
                NotFound(f"path id {todo_id} does not match body id {todo.id}"), todo_id,
            )

        with self.store.transaction():
            existing = self.store.get(todo_id)
            if existing is None:
                self._fail(Operation.UPDATE, identity, NotFound(f"todo {todo_id} not found"), todo_id)

            replacement = todo
            if self.strict_ownership:
                if existing.owner != identity.owner_id:
                    self._fail(
                        Operation.UPDATE, identity,
                        Unauthorized(f"todo {todo_id} is not owned by caller"), todo_id,
                    )
                replacement = Todo(id=todo.id, owner=existing.owner, title=todo.title)

            self.store.update(replacement)

        self._record(Operation.UPDATE, identity, todo_id=todo_id)
        logger.info("todo_updated id=%d owner=%s", replacement.id, replacement.owner)
        return replacement

    def delete_todo(self, identity: CallerIdentity, todo_id: int) -> bool:
        """Delete an owned item. Returns False when no such item existed."""
        self._require_policy(Operation.DELETE, identity, WRITE_POLICY, todo_id)

        owner = identity.owner_id if self.strict_ownership else identity.oid_only_owner_id
        with self.store.transaction():
            existing = self.store.get(todo_id)
            if existing is None:
                self._record(Operation.DELETE, identity, todo_id=todo_id, reason="absent, nothing to delete")
                return False
            if existing.owner != owner:
                self._fail(
                    Operation.DELETE, identity,
                    Unauthorized(f"todo {todo_id} is not owned by caller"), todo_id,
                )
            self.store.delete(todo_id)

        self._record(Operation.DELETE, identity, todo_id=todo_id)
        logger.info("todo_deleted id=%d owner=%s", todo_id, owner)
        return True

    # --- Decision bookkeeping ---

    def _require_policy(
        self,
        operation: Operation,
        identity: CallerIdentity,
        policy: str,
        todo_id: int | None = None,
    ) -> None:
        try:
            self.policies.require(identity, policy)
        except Forbidden as exc:
            self._fail(operation, identity, exc, todo_id)

    def _record(
        self,
        operation: Operation,
        identity: CallerIdentity,
        outcome: Outcome = Outcome.OK,
        todo_id: int | None = None,
        reason: str = "",
    ) -> AccessDecision:
        decision = AccessDecision(
            operation=operation,
            outcome=outcome,
            caller=identity,
            todo_id=todo_id,
            reason=reason,
        )
        self.decision_log.append(decision)
        return decision

    def _fail(
        self,
        operation: Operation,
        identity: CallerIdentity,
        error: TodoListError,
        todo_id: int | None = None,
    ) -> NoReturn:
        outcome = _OUTCOMES.get(type(error), Outcome.FORBIDDEN)
        self._record(operation, identity, outcome=outcome, todo_id=todo_id, reason=error.message)
        logger.warning(
            "access_denied operation=%s outcome=%s caller=%s todo_id=%s reason=%s",
            operation.value, outcome.value, identity.owner_id, todo_id, error.message,
        )
        raise error

    def recent_decisions(self, n: int = 50) -> list[dict[str, Any]]:
        if n <= 0:
            return []
        return [d.to_dict() for d in list(self.decision_log)[-n:]]

    def decision_stats(self) -> dict[str, int]:
        stats: dict[str, int] = {o.value: 0 for o in Outcome}
        for d in list(self.decision_log):
            stats[d.outcome.value] += 1
        return stats
