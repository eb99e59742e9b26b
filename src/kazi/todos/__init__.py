"""Todo persistence for kazi.

A single SQLite table holds the todo list. :class:`TodoStore` provides the
create, list, delete, update and case-insensitive search operations the
agent's tools are built on.
"""

from kazi.todos.schema import Todo
from kazi.todos.store import StorageError, TodoStore

__all__ = ["StorageError", "Todo", "TodoStore"]
