"""Tests for the OpenAI-compatible client."""

import json

import pytest
import respx
from httpx import Response

from kazi.llm.client import Message
from kazi.llm.openai_compat import OpenAICompatibleClient
from kazi.tools.todos import create_todo_tools

BASE_URL = "http://localhost:11434/v1"


def _chat_completion(content: str | None, finish_reason: str = "stop") -> dict:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "llama3",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
    }


@pytest.mark.asyncio
@respx.mock
async def test_complete_maps_roles():
    route = respx.post(f"{BASE_URL}/chat/completions").mock(
        return_value=Response(200, json=_chat_completion('{"type": "output", "output": "ok"}'))
    )

    client = OpenAICompatibleClient(model="llama3", base_url=BASE_URL)
    response = await client.complete(
        [
            Message(role="system", content="sys"),
            Message(role="user", content="hi"),
            Message(role="model", content="hello"),
        ]
    )

    assert response.content == '{"type": "output", "output": "ok"}'
    assert response.finish_reason == "stop"

    payload = json.loads(route.calls.last.request.content)
    assert payload["model"] == "llama3"
    assert [m["role"] for m in payload["messages"]] == ["system", "user", "assistant"]
    assert "tools" not in payload
    assert "max_tokens" not in payload

    await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_tools_sent_with_tool_choice_none(store):
    route = respx.post(f"{BASE_URL}/chat/completions").mock(
        return_value=Response(200, json=_chat_completion("{}"))
    )

    client = OpenAICompatibleClient(model="llama3", base_url=BASE_URL, max_tokens=256)
    tools = create_todo_tools(store).openai_tools()
    await client.complete([Message(role="user", content="hi")], tools=tools)

    payload = json.loads(route.calls.last.request.content)
    assert payload["tool_choice"] == "none"
    assert [t["function"]["name"] for t in payload["tools"]][0] == "createTodo"
    assert payload["max_tokens"] == 256

    await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_empty_content_becomes_empty_string():
    respx.post(f"{BASE_URL}/chat/completions").mock(
        return_value=Response(200, json=_chat_completion(None, finish_reason="length"))
    )

    client = OpenAICompatibleClient(model="llama3", base_url=BASE_URL)
    response = await client.complete([Message(role="user", content="hi")])

    assert response.content == ""
    assert response.finish_reason == "length"

    await client.close()
