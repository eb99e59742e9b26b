"""Tool construction and the immutable tool registry."""

import inspect
import types
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Union, get_type_hints

from kazi.tools.base import Tool, ToolFunction, ToolParameter, ToolSchema, UnknownToolError


def _python_type_to_json_schema(py_type: Any) -> str:
    """Convert Python type hint to JSON Schema type.

    Args:
        py_type: Python type annotation

    Returns:
        JSON Schema type string
    """
    # Unwrap Union types (including Optional and X | None)
    args = getattr(py_type, "__args__", None)
    origin = getattr(py_type, "__origin__", None)
    if args and (origin is Union or isinstance(py_type, types.UnionType)):
        non_none = [arg for arg in args if arg is not type(None)]
        if non_none:
            py_type = non_none[0]

    # list[str] and friends
    py_type = getattr(py_type, "__origin__", py_type)

    type_map = {
        str: "string",
        int: "integer",
        float: "number",
        bool: "boolean",
        list: "array",
        dict: "object",
    }

    return type_map.get(py_type, "string")


def _parameter_descriptions(doc: str | None) -> dict[str, str]:
    """Collect ``name: description`` lines from a docstring."""
    descriptions: dict[str, str] = {}
    if not doc:
        return descriptions

    for line in doc.split("\n"):
        name, sep, rest = line.strip().partition(":")
        if sep and name.isidentifier() and rest.strip():
            descriptions.setdefault(name, rest.strip())
    return descriptions


def tool(name: str | None = None, *, description: str) -> Callable[[ToolFunction], Tool]:
    """Decorator that turns a coroutine function into a :class:`Tool`.

    Introspects the function signature and docstring to build the tool schema.

    Args:
        name: Tool name exposed to the model (defaults to the function name)
        description: Human-readable description of what the tool does

    Returns:
        Decorator producing a Tool

    Example:
        @tool("searchTodo", description="Search todos by text")
        async def search_todo(query: str) -> list[dict]:
            '''query: The text to look for'''
            ...
    """

    def decorator(fn: ToolFunction) -> Tool:
        hints = get_type_hints(fn)
        sig = inspect.signature(fn)
        docs = _parameter_descriptions(fn.__doc__)

        parameters: list[ToolParameter] = []
        for param_name, param in sig.parameters.items():
            parameters.append(
                ToolParameter(
                    name=param_name,
                    type=_python_type_to_json_schema(hints.get(param_name, str)),
                    description=docs.get(param_name, f"Parameter {param_name}"),
                    required=param.default == inspect.Parameter.empty,
                )
            )

        schema = ToolSchema(
            name=name or fn.__name__,
            description=description,
            parameters=parameters,
        )
        return Tool(schema=schema, fn=fn)

    return decorator


class ToolRegistry:
    """Read-only mapping from tool name to :class:`Tool`.

    The set of tools is fixed when the registry is built.
    """

    def __init__(self, tools: Iterable[Tool]):
        """Build the registry.

        Args:
            tools: Tools to expose; names must be unique

        Raises:
            ValueError: If two tools share a name
        """
        by_name: dict[str, Tool] = {}
        for t in tools:
            if t.schema.name in by_name:
                raise ValueError(f"Duplicate tool name: {t.schema.name}")
            by_name[t.schema.name] = t
        self._tools = types.MappingProxyType(by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def get(self, name: str) -> Tool:
        """Get a registered tool by name.

        Args:
            name: Tool name

        Returns:
            Tool instance

        Raises:
            UnknownToolError: If tool not found
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def names(self) -> list[str]:
        """Tool names in registration order."""
        return list(self._tools)

    def descriptors(self) -> list[dict[str, Any]]:
        """Descriptors for every tool, as shown to the model."""
        return [t.schema.to_descriptor() for t in self._tools.values()]

    def openai_tools(self) -> list[dict[str, Any]]:
        """Tool schemas in OpenAI function calling format."""
        return [t.schema.to_openai_format() for t in self._tools.values()]
