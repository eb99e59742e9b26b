"""Structured messages exchanged with the model.

Every transcript entry is one of five shapes, tagged by ``type``::

    {"type": "user", "user": "..."}
    {"type": "plan", "plan": "..."}
    {"type": "action", "function": "...", "input": [...]}
    {"type": "observation", "observation": ...}
    {"type": "output", "output": "..."}

Replies from the model are validated against this union; anything else is
rejected with :class:`~kazi.agent.errors.MalformedReplyError`.
"""

import json
import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from kazi.agent.errors import MalformedReplyError

_FENCE_RE = re.compile(r"^```[A-Za-z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


class _Structured(BaseModel):
    model_config = ConfigDict(extra="forbid")


class UserMessage(_Structured):
    type: Literal["user"] = "user"
    user: str


class PlanMessage(_Structured):
    type: Literal["plan"] = "plan"
    plan: str


class ActionMessage(_Structured):
    type: Literal["action"] = "action"
    function: str
    # Tools without parameters may omit the argument list
    input: list[Any] = Field(default_factory=list)


class ObservationMessage(_Structured):
    type: Literal["observation"] = "observation"
    observation: Any


class OutputMessage(_Structured):
    type: Literal["output"] = "output"
    output: str


StructuredMessage = Annotated[
    Union[UserMessage, PlanMessage, ActionMessage, ObservationMessage, OutputMessage],
    Field(discriminator="type"),
]

_ADAPTER: TypeAdapter[StructuredMessage] = TypeAdapter(StructuredMessage)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```), if any."""
    text = text.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


def parse_message(text: str) -> StructuredMessage:
    """Parse one structured message from model output.

    Args:
        text: Raw reply text, optionally fenced as a code block

    Returns:
        The validated message

    Raises:
        MalformedReplyError: If the text is not JSON or doesn't match any shape
    """
    body = strip_code_fence(text)
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise MalformedReplyError(f"Model reply is not valid JSON: {e}", raw=text) from e

    if not isinstance(data, dict):
        raise MalformedReplyError(
            f"Model reply must be a JSON object, got {type(data).__name__}", raw=text
        )

    try:
        return _ADAPTER.validate_python(data)
    except ValidationError as e:
        raise MalformedReplyError(
            f"Model reply doesn't match a known message shape: {e}", raw=text
        ) from e


def dump_message(message: StructuredMessage) -> str:
    """Serialize a structured message to compact JSON."""
    return message.model_dump_json()
