from collections.abc import Sequence
from typing import Any

from src.core.schemas.chat import ChatMessage, TextMessage

SCREENSHOT_PLACEHOLDER = "[screenshot]"


class PromptAdapter:
    """Adapts prompts for different LLM providers."""

    @staticmethod
    def for_claude(system: str, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Format for Anthropic Claude API."""
        return {
            "system": system,
            "messages": messages,
        }

    @staticmethod
    def for_openai(system: str, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Format for OpenAI API."""
        return {
            "messages": [
                {"role": "system", "content": system},
                *messages,
            ],
        }


def history_to_messages(
    history: Sequence[ChatMessage], message: str, window: int
) -> list[dict[str, str]]:
    """Last ``window`` chat turns plus the new message, as role/content dicts.

    Screenshots are replaced by a short placeholder instead of the data URI.
    """
    recent = list(history)[-window:] if window > 0 else []
    messages = [
        {
            "role": "user" if m.sender == "user" else "assistant",
            "content": m.content if isinstance(m, TextMessage) else SCREENSHOT_PLACEHOLDER,
        }
        for m in recent
    ]
    messages.append({"role": "user", "content": message})
    return messages
