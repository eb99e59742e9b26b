"""Tools the model can call through action messages.

Tools are built with the ``@tool`` decorator, which derives a JSON Schema
description from the function signature and docstring. A
:class:`ToolRegistry` holds a fixed set of tools for the lifetime of a chat
session and renders the descriptors shown to the model.

Available tools (see :func:`create_todo_tools`):

- **createTodo** - Add a todo, returns its id
- **getAllTodos** - List every todo
- **deleteTodo** - Delete by id
- **searchTodo** - Case-insensitive substring search
- **updateTodo** - Replace a todo's text by id

Usage::

    from kazi.todos.store import TodoStore
    from kazi.tools.todos import create_todo_tools

    registry = create_todo_tools(TodoStore("todos.db"))
"""

from kazi.tools.base import Tool, ToolArgumentError, ToolError, ToolSchema, UnknownToolError
from kazi.tools.registry import ToolRegistry, tool
from kazi.tools.todos import create_todo_tools

__all__ = [
    "Tool",
    "ToolArgumentError",
    "ToolError",
    "ToolRegistry",
    "ToolSchema",
    "UnknownToolError",
    "create_todo_tools",
    "tool",
]
