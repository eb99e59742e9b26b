"""Dispatch of action messages to registered tools."""

import logging

from kazi.agent.messages import ActionMessage, ObservationMessage
from kazi.tools.base import ToolError
from kazi.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs the tool named by an action and wraps the result as an observation.

    In resilient mode (the default) lookup, argument and execution failures
    are reported back to the model as ``{"error": ...}`` observations so the
    conversation can continue. In strict mode they propagate to the caller.
    """

    def __init__(self, registry: ToolRegistry, strict: bool = False):
        """Initialize the dispatcher.

        Args:
            registry: Tools that actions may name
            strict: Raise instead of returning error observations
        """
        self.registry = registry
        self.strict = strict

    async def dispatch(self, action: ActionMessage) -> ObservationMessage:
        """Execute an action.

        Args:
            action: Parsed action message from the model

        Returns:
            Observation holding the tool's return value, or an error payload

        Raises:
            UnknownToolError: In strict mode, if the tool isn't registered
            ToolArgumentError: In strict mode, if the arguments don't fit the schema
            Exception: In strict mode, whatever the tool itself raised
        """
        try:
            tool = self.registry.get(action.function)
            args = tool.schema.coerce_arguments(action.input)
        except ToolError as e:
            if self.strict:
                raise
            logger.warning("Rejected action %s: %s", action.function, e)
            return ObservationMessage(observation={"error": str(e)})

        logger.debug("Calling %s%r", action.function, tuple(args))
        try:
            result = await tool.execute(*args)
        except Exception as e:
            if self.strict:
                raise
            logger.warning("Tool %s failed: %s", action.function, e)
            return ObservationMessage(
                observation={"error": f"Error executing '{action.function}': {e}"}
            )

        return ObservationMessage(observation=result)
