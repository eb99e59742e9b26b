"""Conversation engine: the plan/action/observation/output loop."""

import enum
import logging
from typing import Callable, Optional

from kazi.agent.dispatch import Dispatcher
from kazi.agent.errors import MalformedReplyError, StepLimitExceeded
from kazi.agent.messages import (
    ActionMessage,
    ObservationMessage,
    OutputMessage,
    PlanMessage,
    StructuredMessage,
    UserMessage,
    parse_message,
)
from kazi.agent.prompt import build_system_prompt
from kazi.agent.transcript import Transcript
from kazi.llm.client import LLMClient, Message
from kazi.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class EngineState(enum.Enum):
    """Where the engine is within a request."""

    AWAIT_USER_INPUT = "await_user_input"
    MODEL_TURN = "model_turn"


class ConversationEngine:
    """Drives one chat session against a tool registry."""

    def __init__(
        self,
        llm: LLMClient,
        registry: ToolRegistry,
        max_steps: int = 10,
        max_history_tokens: int = 8192,
        strict_dispatch: bool = False,
        on_step: Optional[Callable[[StructuredMessage], None]] = None,
    ):
        """Initialize the engine.

        Args:
            llm: LLM client for generating replies
            registry: Tools the model may call
            max_steps: Maximum model calls per user request
            max_history_tokens: Token budget for the transcript window sent to the model
            strict_dispatch: Raise on dispatch failures instead of reporting
                             them to the model as observations
            on_step: Called with every plan, action and observation as it happens
        """
        self.llm = llm
        self.registry = registry
        self.max_steps = max_steps
        self.max_history_tokens = max_history_tokens
        self.dispatcher = Dispatcher(registry, strict=strict_dispatch)
        self.on_step = on_step

        self.transcript = Transcript()
        self.state = EngineState.AWAIT_USER_INPUT
        self.system_prompt = build_system_prompt(registry)
        self._tool_schemas = registry.openai_tools()

    async def handle(self, user_input: str) -> str:
        """Process one user request until the model produces an output.

        Args:
            user_input: Text typed by the operator

        Returns:
            The model's output text

        Raises:
            MalformedReplyError: If a model reply can't be parsed
            StepLimitExceeded: If no output arrives within ``max_steps`` model calls
        """
        self.transcript.append("user", UserMessage(user=user_input))
        self.state = EngineState.MODEL_TURN

        try:
            for step in range(1, self.max_steps + 1):
                reply = await self._model_turn()
                logger.debug("Step %d: %s", step, reply.type)
                self.transcript.append("model", reply)

                if isinstance(reply, OutputMessage):
                    return reply.output

                self._notify(reply)

                if isinstance(reply, ActionMessage):
                    observation = await self.dispatcher.dispatch(reply)
                    self.transcript.append("user", observation)
                    self._notify(observation)
                # A plan needs no handling beyond being recorded

            raise StepLimitExceeded(self.max_steps)
        finally:
            self.state = EngineState.AWAIT_USER_INPUT

    async def _model_turn(self) -> StructuredMessage:
        """Send the transcript window to the model and parse its reply."""
        messages = [Message(role="system", content=self.system_prompt)]
        messages.extend(self.transcript.window(self.max_history_tokens))

        response = await self.llm.complete(messages=messages, tools=self._tool_schemas)
        reply = parse_message(response.content)

        if isinstance(reply, (UserMessage, ObservationMessage)):
            raise MalformedReplyError(
                f"Model replied with a '{reply.type}' message, which only the system may send",
                raw=response.content,
            )
        return reply

    def _notify(self, message: PlanMessage | ActionMessage | ObservationMessage) -> None:
        if self.on_step is not None:
            self.on_step(message)
