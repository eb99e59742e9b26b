"""Conversation engine for natural-language todo management.

The model answers every call with one structured JSON message. Plans are
recorded, actions are dispatched to the todo tools and their results are
appended as observations, and an output ends the request::

    user -> plan -> action -> observation -> ... -> output

Usage::

    from kazi.agent import ConversationEngine
    from kazi.llm.gemini import GeminiClient
    from kazi.todos.store import TodoStore
    from kazi.tools.todos import create_todo_tools

    engine = ConversationEngine(
        llm=GeminiClient(api_key="..."),
        registry=create_todo_tools(TodoStore("todos.db")),
    )
    reply = await engine.handle("Add milk to my list")
"""

from kazi.agent.dispatch import Dispatcher
from kazi.agent.errors import AgentError, MalformedReplyError, StepLimitExceeded
from kazi.agent.loop import ConversationEngine, EngineState
from kazi.agent.messages import (
    ActionMessage,
    ObservationMessage,
    OutputMessage,
    PlanMessage,
    StructuredMessage,
    UserMessage,
    parse_message,
)
from kazi.agent.transcript import Transcript

__all__ = [
    "ActionMessage",
    "AgentError",
    "ConversationEngine",
    "Dispatcher",
    "EngineState",
    "MalformedReplyError",
    "ObservationMessage",
    "OutputMessage",
    "PlanMessage",
    "StepLimitExceeded",
    "StructuredMessage",
    "Transcript",
    "UserMessage",
    "parse_message",
]
