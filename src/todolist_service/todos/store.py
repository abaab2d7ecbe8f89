"""
In-memory to-do store.

Keyed mapping from integer id to Todo, guarded by a re-entrant lock.
Callers that need check-then-act atomicity wrap their work in
``transaction()``.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from .models import Todo

logger = logging.getLogger(__name__)

SAMPLE_TITLES = ("Pick up groceries", "Finish invoice report")


class TodoStore:
    """Lock-guarded store of to-do items."""

    def __init__(self, todos: list[Todo] | None = None):
        self._lock = threading.RLock()
        self._todos: dict[int, Todo] = {}
        for todo in todos or []:
            self._todos[todo.id] = todo

    @contextmanager
    def transaction(self) -> Iterator[TodoStore]:
        """Hold exclusive access to the store for the enclosed block."""
        with self._lock:
            yield self

    # --- Reads ---

    def get(self, todo_id: int) -> Todo | None:
        with self._lock:
            return self._todos.get(todo_id)

    def list(self, predicate: Callable[[Todo], bool] | None = None) -> list[Todo]:
        with self._lock:
            todos = sorted(self._todos.values(), key=lambda t: t.id)
        if predicate is None:
            return todos
        return [t for t in todos if predicate(t)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    def __contains__(self, todo_id: object) -> bool:
        with self._lock:
            return todo_id in self._todos

    # --- Mutations ---

    def next_id(self) -> int:
        """Return max existing id + 1, or 1 when empty."""
        with self._lock:
            return max(self._todos, default=0) + 1

    def insert(self, todo: Todo) -> Todo:
        with self._lock:
            if todo.id in self._todos:
                raise KeyError(f"todo {todo.id} already exists")
            self._todos[todo.id] = todo
            return todo

    def add(self, owner: str, title: str) -> Todo:
        """Allocate the next id and insert a new item atomically."""
        with self._lock:
            return self.insert(Todo(id=self.next_id(), owner=owner, title=title))

    def update(self, todo: Todo) -> bool:
        """Replace an existing entry wholesale. Returns False if absent."""
        with self._lock:
            if todo.id not in self._todos:
                return False
            self._todos[todo.id] = todo
            return True

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            return self._todos.pop(todo_id, None) is not None

    def seed_if_empty(self, owner: str) -> bool:
        """Populate sample items for ``owner`` when the store is empty."""
        with self._lock:
            if self._todos:
                return False
            for title in SAMPLE_TITLES:
                self.add(owner, title)
        logger.info("store_seeded owner=%s count=%d", owner, len(SAMPLE_TITLES))
        return True

    def summary(self) -> dict[str, int]:
        with self._lock:
            return {
                "total_todos": len(self._todos),
                "owners": len({t.owner for t in self._todos.values()}),
            }
