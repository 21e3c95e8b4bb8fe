from src.core.schemas.chat import (
    AgentReplies,
    AgentReply,
    AgentRequest,
    ChatMessage,
    ScreenshotMessage,
    TextMessage,
    read_history_entry,
)
from src.core.schemas.intent import EMAIL_INTENT_FIELDS, EmailIntent

__all__ = [
    "AgentReplies",
    "AgentReply",
    "AgentRequest",
    "ChatMessage",
    "EMAIL_INTENT_FIELDS",
    "EmailIntent",
    "ScreenshotMessage",
    "TextMessage",
    "read_history_entry",
]
