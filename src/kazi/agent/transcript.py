"""Session transcript and the token-budgeted window sent to the model."""

from dataclasses import dataclass

from kazi.agent.messages import StructuredMessage, UserMessage, dump_message
from kazi.llm.client import Message


def estimate_tokens(text: str) -> int:
    """Estimate token count for a piece of text.

    Uses a simple heuristic: ~4 characters per token.

    Args:
        text: Text to estimate tokens for

    Returns:
        Estimated token count
    """
    return len(text) // 4


@dataclass(frozen=True)
class TranscriptEntry:
    """A structured message and the role it was sent under."""

    role: str  # "user" or "model"
    message: StructuredMessage

    def to_llm_message(self) -> Message:
        return Message(role=self.role, content=dump_message(self.message))


class Transcript:
    """Append-only log of every structured message in the session."""

    def __init__(self) -> None:
        self._entries: list[TranscriptEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    def append(self, role: str, message: StructuredMessage) -> None:
        """Add a message to the end of the transcript.

        Args:
            role: "user" for operator input and observations, "model" for replies
            message: The structured message
        """
        if role not in ("user", "model"):
            raise ValueError(f"Invalid transcript role: {role}")
        self._entries.append(TranscriptEntry(role=role, message=message))

    def _current_request_start(self) -> int:
        """Index of the latest operator message, or of the newest entry if there is none."""
        for index in range(len(self._entries) - 1, -1, -1):
            if isinstance(self._entries[index].message, UserMessage):
                return index
        return max(len(self._entries) - 1, 0)

    def window(self, max_tokens: int) -> list[Message]:
        """Most recent entries that fit within a token budget.

        Everything from the latest user message onward (the request being
        worked on, with its plans, actions and observations) is always
        included, even if it alone exceeds the budget. Older history fills
        whatever budget remains, and starts at a user message so the model
        never sees a reply without its request.

        Args:
            max_tokens: Token budget

        Returns:
            Messages in chronological order
        """
        messages = [entry.to_llm_message() for entry in self._entries]

        total_tokens = sum(estimate_tokens(msg.content) for msg in messages)
        if total_tokens <= max_tokens:
            return messages

        start = self._current_request_start()
        current = messages[start:]
        remaining = max_tokens - sum(estimate_tokens(msg.content) for msg in current)

        # Walk back through older history while it fits
        first = start
        while first > 0:
            msg_tokens = estimate_tokens(messages[first - 1].content)
            if msg_tokens > remaining:
                break
            remaining -= msg_tokens
            first -= 1

        # Drop a partial exchange at the front of the older history
        while first < start and not isinstance(self._entries[first].message, UserMessage):
            first += 1

        return messages[first:]
