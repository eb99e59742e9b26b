"""Errors raised by the conversation engine."""


class AgentError(Exception):
    """Base class for conversation engine errors."""


class MalformedReplyError(AgentError):
    """The model's reply is not a valid structured message.

    Attributes:
        raw: The reply text as received from the model
    """

    def __init__(self, message: str, raw: str):
        super().__init__(message)
        self.raw = raw


class StepLimitExceeded(AgentError):
    """The model took too many steps without producing an output."""

    def __init__(self, max_steps: int):
        super().__init__(f"No output after {max_steps} model steps")
        self.max_steps = max_steps
