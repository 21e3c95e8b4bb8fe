"""Chat wire models.

A chat message is a tagged variant keyed on ``type``: plain text or a PNG
screenshot carried as a data URI. The wire shape is ``{sender, type, content}``.
"""

import base64
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

PNG_DATA_URI_PREFIX = "data:image/png;base64,"

Sender = Literal["user", "agent"]


class TextMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    sender: Sender = "agent"
    type: Literal["text"] = "text"
    content: str


class ScreenshotMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    sender: Sender = "agent"
    type: Literal["screenshot"] = "screenshot"
    content: str

    @field_validator("content")
    @classmethod
    def _require_png_data_uri(cls, value: str) -> str:
        if not value.startswith(PNG_DATA_URI_PREFIX):
            raise ValueError("screenshot content must be a base64 PNG data URI")
        return value

    @classmethod
    def from_png(cls, png: bytes, sender: Sender = "agent") -> "ScreenshotMessage":
        """Wrap raw PNG bytes as a screenshot message."""
        encoded = base64.b64encode(png).decode("ascii")
        return cls(sender=sender, content=f"{PNG_DATA_URI_PREFIX}{encoded}")


ChatMessage = Annotated[TextMessage | ScreenshotMessage, Field(discriminator="type")]


def read_history_entry(raw: Any) -> ChatMessage | None:
    """Best reading of one client-supplied history entry, or None if unusable.

    A missing or unknown ``type`` reads as text and an unknown ``sender`` as
    agent. Entries without string content, and screenshots that are not PNG
    data URIs, are unusable.
    """
    if isinstance(raw, TextMessage | ScreenshotMessage):
        return raw
    if not isinstance(raw, dict) or not isinstance(raw.get("content"), str):
        return None
    sender = raw.get("sender")
    if sender not in ("user", "agent"):
        sender = "agent"
    if raw.get("type") == "screenshot":
        try:
            return ScreenshotMessage(sender=sender, content=raw["content"])
        except ValidationError:
            return None
    return TextMessage(sender=sender, content=raw["content"])


class AgentRequest(BaseModel):
    """Body of ``POST /api/agent``.

    Only the envelope is strict: ``message`` must be a string and ``history``
    a list. Entries are read with ``read_history_entry`` and unreadable ones
    are dropped.
    """

    message: StrictStr
    history: list[ChatMessage]

    @field_validator("history", mode="before")
    @classmethod
    def _lenient_entries(cls, value: Any) -> list[ChatMessage]:
        if not isinstance(value, list):
            raise ValueError("history must be a list")
        entries = (read_history_entry(raw) for raw in value)
        return [entry for entry in entries if entry is not None]


class AgentReply(BaseModel):
    reply: ChatMessage


class AgentReplies(BaseModel):
    replies: list[ChatMessage]


def agent_text(content: str) -> TextMessage:
    return TextMessage(sender="agent", content=content)
