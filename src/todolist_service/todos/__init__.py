"""To-do items and their store."""

from .models import Todo
from .store import TodoStore

__all__ = ["Todo", "TodoStore"]
