"""Tests for structured message parsing."""

import json

import pytest

from kazi.agent.errors import MalformedReplyError
from kazi.agent.messages import (
    ActionMessage,
    ObservationMessage,
    OutputMessage,
    PlanMessage,
    UserMessage,
    dump_message,
    parse_message,
    strip_code_fence,
)


class TestStripCodeFence:
    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_surrounding_whitespace(self):
        assert strip_code_fence('\n  ```json\n{"a": 1}\n```  \n') == '{"a": 1}'

    def test_unfenced_text_unchanged(self):
        assert strip_code_fence(' {"a": 1} ') == '{"a": 1}'


class TestParseMessage:
    def test_plan(self):
        msg = parse_message('{"type": "plan", "plan": "Look up todos first"}')
        assert isinstance(msg, PlanMessage)
        assert msg.plan == "Look up todos first"

    def test_action(self):
        msg = parse_message('{"type": "action", "function": "createTodo", "input": ["milk"]}')
        assert isinstance(msg, ActionMessage)
        assert msg.function == "createTodo"
        assert msg.input == ["milk"]

    def test_action_without_input(self):
        msg = parse_message('{"type": "action", "function": "getAllTodos"}')
        assert isinstance(msg, ActionMessage)
        assert msg.input == []

    def test_output_in_fence(self):
        msg = parse_message('```json\n{"type": "output", "output": "Done!"}\n```')
        assert isinstance(msg, OutputMessage)
        assert msg.output == "Done!"

    def test_observation_allows_any_payload(self):
        msg = parse_message('{"type": "observation", "observation": null}')
        assert isinstance(msg, ObservationMessage)
        assert msg.observation is None

    def test_user(self):
        assert isinstance(parse_message('{"type": "user", "user": "hi"}'), UserMessage)

    def test_invalid_json(self):
        with pytest.raises(MalformedReplyError, match="not valid JSON") as exc_info:
            parse_message("Sure! I added it.")
        assert exc_info.value.raw == "Sure! I added it."

    def test_non_object(self):
        with pytest.raises(MalformedReplyError, match="JSON object"):
            parse_message('["output", "hi"]')

    def test_unknown_type(self):
        with pytest.raises(MalformedReplyError, match="known message shape"):
            parse_message('{"type": "thought", "thought": "hmm"}')

    def test_missing_type(self):
        with pytest.raises(MalformedReplyError):
            parse_message('{"output": "hi"}')

    def test_missing_required_field(self):
        with pytest.raises(MalformedReplyError):
            parse_message('{"type": "output"}')

    def test_extra_field_rejected(self):
        with pytest.raises(MalformedReplyError):
            parse_message('{"type": "output", "output": "hi", "plan": "x"}')

    def test_action_input_must_be_array(self):
        with pytest.raises(MalformedReplyError):
            parse_message('{"type": "action", "function": "createTodo", "input": "milk"}')

    def test_two_objects_rejected(self):
        with pytest.raises(MalformedReplyError):
            parse_message('{"type": "plan", "plan": "a"}\n{"type": "output", "output": "b"}')


def test_dump_message():
    data = json.loads(dump_message(ObservationMessage(observation=7)))
    assert data == {"type": "observation", "observation": 7}


def test_dump_then_parse_action():
    action = ActionMessage(function="updateTodo", input=[1, "new"])
    assert parse_message(dump_message(action)) == action
