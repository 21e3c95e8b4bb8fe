"""Webmail automation run state definition."""

import operator
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Annotated, TypedDict

from src.core.config import Settings
from src.core.schemas.chat import ChatMessage
from src.core.schemas.intent import EmailIntent
from src.orchestrators.webmail.provider import WebmailProvider
from src.tools.browser import BrowserSession


class RunOutcome(StrEnum):
    sent = "sent"
    captcha_blocked = "captcha_blocked"
    password_field_timeout = "password_field_timeout"
    security_blocked = "security_blocked"
    compose_fill_failure = "compose_fill_failure"
    unhandled_failure = "unhandled_failure"


@dataclass(frozen=True)
class AutomationTimings:
    """Waits and timeouts for one run, in milliseconds."""

    navigation_timeout_ms: int = 30_000
    email_settle_ms: int = 2_000
    password_field_timeout_ms: int = 8_000
    password_settle_ms: int = 4_000
    inbox_settle_ms: int = 4_000
    compose_settle_ms: int = 3_000
    overlay_dismiss_timeout_ms: int = 2_000
    field_visible_timeout_ms: int = 15_000
    field_action_timeout_ms: int = 3_000
    fill_attempts: int = 3
    fill_focus_pause_ms: int = 500
    fill_backoff_ms: int = 1_000
    send_settle_ms: int = 5_000

    @classmethod
    def from_settings(cls, settings: Settings) -> "AutomationTimings":
        return cls(**{f.name: getattr(settings, f.name) for f in fields(cls)})


@dataclass
class RunDeps:
    """Per-run collaborators handed to graph nodes via ``configurable``."""

    session: BrowserSession
    provider: WebmailProvider
    timings: AutomationTimings


class WebmailRunState(TypedDict, total=False):
    """State for the webmail LangGraph run."""

    intent: EmailIntent
    # Append-only: every node's messages are concatenated in order
    narrative: Annotated[list[ChatMessage], operator.add]
    # Set once a terminal state is reached
    outcome: RunOutcome
