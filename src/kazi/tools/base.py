"""Base types for the tool system."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any


class ToolError(Exception):
    """Base class for tool lookup and invocation errors."""


class UnknownToolError(ToolError):
    """Raised when an action names a tool that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown function: {name}")
        self.name = name


class ToolArgumentError(ToolError):
    """Raised when action arguments don't match the tool's parameter schema."""


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""

    name: str
    type: str  # JSON Schema type
    description: str
    required: bool = True


def _matches_type(value: Any, json_type: str) -> bool:
    # bool is an int subclass; never accept it for numeric parameters
    if json_type == "string":
        return isinstance(value, str)
    if json_type == "integer":
        if isinstance(value, bool):
            return False
        return isinstance(value, int) or (isinstance(value, float) and value.is_integer())
    if json_type == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if json_type == "boolean":
        return isinstance(value, bool)
    if json_type == "array":
        return isinstance(value, list)
    if json_type == "object":
        return isinstance(value, dict)
    return True


@dataclass
class ToolSchema:
    """JSON Schema representation of a tool, with ordered parameters."""

    name: str
    description: str
    parameters: list[ToolParameter]

    def parameters_schema(self) -> dict[str, Any]:
        """Build the JSON Schema object describing the parameters."""
        properties = {}
        required = []

        for param in self.parameters:
            properties[param.name] = {
                "type": param.type,
                "description": param.description,
            }
            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def to_descriptor(self) -> dict[str, Any]:
        """Convert to the descriptor shown to the model.

        Tools without parameters omit the ``parameters`` key, which is what
        Gemini function declarations expect.

        Returns:
            Dictionary with name, description and (optional) parameters
        """
        descriptor: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
        }
        if self.parameters:
            descriptor["parameters"] = self.parameters_schema()
        return descriptor

    def to_openai_format(self) -> dict[str, Any]:
        """Convert to OpenAI function calling format.

        Returns:
            Dictionary matching OpenAI's function schema format
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters_schema(),
            },
        }

    def coerce_arguments(self, args: list[Any]) -> list[Any]:
        """Check positional arguments against the declared parameters.

        Integral floats are narrowed to ``int`` for integer parameters, since
        JSON decoders may hand back ``7.0`` for ``7``.

        Args:
            args: Positional arguments, in parameter order

        Returns:
            Arguments ready to pass to the tool function

        Raises:
            ToolArgumentError: On wrong arity or a type mismatch
        """
        required = sum(1 for p in self.parameters if p.required)
        if not required <= len(args) <= len(self.parameters):
            expected = (
                str(required)
                if required == len(self.parameters)
                else f"{required} to {len(self.parameters)}"
            )
            raise ToolArgumentError(
                f"{self.name} expects {expected} argument(s), got {len(args)}"
            )

        coerced: list[Any] = []
        for param, value in zip(self.parameters, args):
            if not _matches_type(value, param.type):
                raise ToolArgumentError(
                    f"{self.name}: argument '{param.name}' must be of type {param.type}, "
                    f"got {type(value).__name__}"
                )
            if param.type == "integer" and isinstance(value, float):
                value = int(value)
            coerced.append(value)

        return coerced


# Tool function signature: async function returning a JSON-compatible value
ToolFunction = Callable[..., Awaitable[Any]]


@dataclass
class Tool:
    """A tool that the agent can use."""

    schema: ToolSchema
    fn: ToolFunction

    async def execute(self, *args: Any) -> Any:
        """Execute the tool with positional arguments.

        Args:
            *args: Tool arguments in parameter order

        Returns:
            Tool result (JSON-compatible)
        """
        return await self.fn(*args)
