"""Todo tools exposed to the model.

Each tool wraps one :class:`~kazi.todos.store.TodoStore` operation and returns
JSON-compatible data so the result can be embedded in an observation.
"""

import logging
from typing import Any

from kazi.todos.store import TodoStore
from kazi.tools.registry import ToolRegistry, tool

logger = logging.getLogger(__name__)


def create_todo_tools(store: TodoStore) -> ToolRegistry:
    """Build the registry of todo tools bound to a store.

    Args:
        store: Todo store the tools operate on

    Returns:
        Registry with createTodo, getAllTodos, deleteTodo, searchTodo and updateTodo
    """

    @tool("createTodo", description="Creates a todo in the database and returns the created todo id")
    async def create_todo(todo: str) -> int:
        """todo: The todo title to create the todo"""
        return store.create(todo)

    @tool("getAllTodos", description="Returns the list of all todos from the database")
    async def get_all_todos() -> list[dict[str, Any]]:
        return [t.model_dump(mode="json") for t in store.list()]

    @tool(
        "deleteTodo",
        description=(
            "Deletes a todo from the database based on the id provided and returns the "
            "deleted todo id after successful deletion, or null if no todo has that id"
        ),
    )
    async def delete_todo(id: int) -> int | None:
        """id: The id of the todo to delete"""
        return store.delete(id)

    @tool(
        "searchTodo",
        description=(
            "Searches for todos in the database based on the query provided and returns "
            "the list of matched todos"
        ),
    )
    async def search_todo(query: str) -> list[dict[str, Any]]:
        """query: The query to search for todos"""
        return [t.model_dump(mode="json") for t in store.search(query)]

    @tool(
        "updateTodo",
        description=(
            "Updates a todo in the database based on the id provided and returns the "
            "updated todo id, or null if no todo has that id"
        ),
    )
    async def update_todo(id: int, todo: str) -> int | None:
        """
        id: The id of the todo to update
        todo: The todo title to update the todo
        """
        return store.update(id, todo)

    registry = ToolRegistry([create_todo, get_all_todos, delete_todo, search_todo, update_todo])
    logger.debug("Registered todo tools: %s", ", ".join(registry.names()))
    return registry
