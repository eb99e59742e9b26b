"""Tests for the conversation engine."""

import json
from typing import Any

import pytest

from kazi.agent.errors import MalformedReplyError, StepLimitExceeded
from kazi.agent.loop import ConversationEngine, EngineState
from kazi.agent.messages import ActionMessage, ObservationMessage, PlanMessage
from kazi.llm.client import CompletionResponse, Message
from kazi.tools.base import UnknownToolError
from kazi.tools.todos import create_todo_tools


class ScriptedLLM:
    """Mock LLM client that replays predefined replies."""

    def __init__(self, replies: list[Any]):
        """Initialize with predefined replies.

        Args:
            replies: Dicts (sent as JSON) or raw strings, returned in order
        """
        self.replies = replies
        self.call_count = 0
        self.calls: list[dict[str, Any]] = []

    async def complete(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResponse:
        """Return next predefined reply."""
        self.calls.append({"messages": list(messages), "tools": tools})

        reply = self.replies[self.call_count]
        self.call_count += 1

        content = reply if isinstance(reply, str) else json.dumps(reply)
        return CompletionResponse(content=content)

    async def close(self) -> None:
        pass


@pytest.fixture
def registry(store):
    return create_todo_tools(store)


def _transcript_dicts(engine: ConversationEngine) -> list[tuple[str, dict]]:
    return [(e.role, e.message.model_dump()) for e in engine.transcript.entries]


@pytest.mark.asyncio
async def test_output_reply_returned_without_more_calls(registry):
    llm = ScriptedLLM([{"type": "output", "output": "Hello! **How** can I help?"}])
    engine = ConversationEngine(llm=llm, registry=registry)

    result = await engine.handle("Hi there")

    assert result == "Hello! **How** can I help?"
    assert llm.call_count == 1
    assert engine.state is EngineState.AWAIT_USER_INPUT


@pytest.mark.asyncio
async def test_model_call_carries_system_prompt_history_and_tools(registry):
    llm = ScriptedLLM([{"type": "output", "output": "ok"}])
    engine = ConversationEngine(llm=llm, registry=registry)

    await engine.handle("Hi")

    call = llm.calls[0]
    system, user = call["messages"]
    assert system.role == "system"
    assert system.content == engine.system_prompt
    assert user.role == "user"
    assert json.loads(user.content) == {"type": "user", "user": "Hi"}
    assert [t["function"]["name"] for t in call["tools"]] == registry.names()


@pytest.mark.asyncio
async def test_end_to_end_add_milk(registry, store):
    """user -> plan -> action -> observation -> output."""
    llm = ScriptedLLM(
        [
            {"type": "plan", "plan": "I will create a todo for milk."},
            {"type": "action", "function": "createTodo", "input": ["milk"]},
            {"type": "output", "output": "Added milk to your list."},
        ]
    )
    steps = []
    engine = ConversationEngine(llm=llm, registry=registry, on_step=steps.append)

    result = await engine.handle("Add milk to my list")

    assert result == "Added milk to your list."
    assert llm.call_count == 3

    [todo] = store.list()
    assert todo.todo == "milk"

    assert _transcript_dicts(engine) == [
        ("user", {"type": "user", "user": "Add milk to my list"}),
        ("model", {"type": "plan", "plan": "I will create a todo for milk."}),
        ("model", {"type": "action", "function": "createTodo", "input": ["milk"]}),
        ("user", {"type": "observation", "observation": todo.id}),
        ("model", {"type": "output", "output": "Added milk to your list."}),
    ]

    # The third call saw the observation without new user input
    last_messages = llm.calls[2]["messages"]
    assert json.loads(last_messages[-1].content) == {
        "type": "observation",
        "observation": todo.id,
    }

    assert [type(s) for s in steps] == [PlanMessage, ActionMessage, ObservationMessage]


@pytest.mark.asyncio
async def test_transcript_persists_across_requests(registry, store):
    llm = ScriptedLLM(
        [
            {"type": "output", "output": "Which items?"},
            {"type": "action", "function": "createTodo", "input": ["bread"]},
            {"type": "output", "output": "Done."},
        ]
    )
    engine = ConversationEngine(llm=llm, registry=registry)

    assert await engine.handle("Add a shopping task") == "Which items?"
    assert await engine.handle("Bread") == "Done."

    # Second request's first call includes the first exchange
    history = [json.loads(m.content) for m in llm.calls[1]["messages"][1:]]
    assert history[0] == {"type": "user", "user": "Add a shopping task"}
    assert history[1] == {"type": "output", "output": "Which items?"}
    assert history[2] == {"type": "user", "user": "Bread"}
    assert len(engine.transcript) == 6


@pytest.mark.asyncio
async def test_fenced_reply_is_accepted(registry):
    llm = ScriptedLLM(['```json\n{"type": "output", "output": "fenced"}\n```'])
    engine = ConversationEngine(llm=llm, registry=registry)

    assert await engine.handle("hi") == "fenced"


@pytest.mark.asyncio
async def test_malformed_reply_ends_turn(registry):
    llm = ScriptedLLM(["I think I'll just chat instead."])
    engine = ConversationEngine(llm=llm, registry=registry)

    with pytest.raises(MalformedReplyError):
        await engine.handle("hi")

    # Only the user message was recorded
    assert len(engine.transcript) == 1
    assert engine.state is EngineState.AWAIT_USER_INPUT


@pytest.mark.asyncio
async def test_model_may_not_send_observations(registry):
    llm = ScriptedLLM([{"type": "observation", "observation": 1}])
    engine = ConversationEngine(llm=llm, registry=registry)

    with pytest.raises(MalformedReplyError, match="only the system"):
        await engine.handle("hi")


@pytest.mark.asyncio
async def test_unknown_tool_strict_mode_invokes_nothing(registry, store):
    llm = ScriptedLLM([{"type": "action", "function": "dropTable", "input": ["todos"]}])
    engine = ConversationEngine(llm=llm, registry=registry, strict_dispatch=True)

    with pytest.raises(UnknownToolError):
        await engine.handle("Delete everything")

    assert llm.call_count == 1
    assert store.count() == 0


@pytest.mark.asyncio
async def test_unknown_tool_resilient_mode_reports_to_model(registry):
    llm = ScriptedLLM(
        [
            {"type": "action", "function": "dropTable", "input": []},
            {"type": "output", "output": "Sorry, I can't do that."},
        ]
    )
    engine = ConversationEngine(llm=llm, registry=registry)

    assert await engine.handle("Drop the table") == "Sorry, I can't do that."

    observation = engine.transcript.entries[2].message
    assert isinstance(observation, ObservationMessage)
    assert observation.observation == {"error": "Unknown function: dropTable"}


@pytest.mark.asyncio
async def test_missing_row_delete_is_observed_as_null(registry):
    llm = ScriptedLLM(
        [
            {"type": "action", "function": "deleteTodo", "input": [404]},
            {"type": "output", "output": "That todo doesn't exist."},
        ]
    )
    engine = ConversationEngine(llm=llm, registry=registry)

    assert await engine.handle("Delete todo 404") == "That todo doesn't exist."
    assert engine.transcript.entries[2].message.observation is None


@pytest.mark.asyncio
async def test_step_limit(registry):
    llm = ScriptedLLM([{"type": "plan", "plan": "thinking..."}] * 3)
    engine = ConversationEngine(llm=llm, registry=registry, max_steps=3)

    with pytest.raises(StepLimitExceeded, match="3"):
        await engine.handle("hi")

    assert llm.call_count == 3
    assert engine.state is EngineState.AWAIT_USER_INPUT


@pytest.mark.asyncio
async def test_large_observation_keeps_request_in_view(registry, store):
    for i in range(60):
        store.create(f"Todo number {i} with a fairly long description")

    llm = ScriptedLLM(
        [
            {"type": "action", "function": "getAllTodos", "input": []},
            {"type": "output", "output": "You have 60 todos."},
        ]
    )
    engine = ConversationEngine(llm=llm, registry=registry, max_history_tokens=256)

    assert await engine.handle("What is on my list?") == "You have 60 todos."

    sent = [json.loads(m.content) for m in llm.calls[1]["messages"][1:]]
    assert [m["type"] for m in sent] == ["user", "action", "observation"]
    assert sent[0]["user"] == "What is on my list?"
    assert len(sent[2]["observation"]) == 60


@pytest.mark.asyncio
async def test_history_window_is_applied(registry):
    llm = ScriptedLLM([{"type": "output", "output": "ok"}] * 2)
    engine = ConversationEngine(llm=llm, registry=registry, max_history_tokens=256)

    await engine.handle("x" * 2000)
    await engine.handle("short")

    # The long first request no longer fits; system prompt + recent entries only
    sent = [json.loads(m.content) for m in llm.calls[1]["messages"][1:]]
    assert {"type": "user", "user": "x" * 2000} not in sent
    assert sent[-1] == {"type": "user", "user": "short"}
